"""Output models produced by the exporters."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from dataprivacy.core.validation import ValidationError


@dataclass(frozen=True)
class UserSummary:
    """Minimal public profile of a user."""
    id: int
    fullname: str
    email: str = ""
    idnumber: str = ""
    phone1: str = ""
    phone2: str = ""
    department: str = ""
    institution: str = ""
    identity: str = ""
    profileurl: str = ""
    profileimageurl: str = ""
    profileimageurlsmall: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert summary to dictionary."""
        return {
            'id': self.id,
            'fullname': self.fullname,
            'email': self.email,
            'idnumber': self.idnumber,
            'phone1': self.phone1,
            'phone2': self.phone2,
            'department': self.department,
            'institution': self.institution,
            'identity': self.identity,
            'profileurl': self.profileurl,
            'profileimageurl': self.profileimageurl,
            'profileimageurlsmall': self.profileimageurlsmall,
        }


# Derived view model fields: name -> type, whether optional, default.
VIEW_MODEL_PROPERTIES: Mapping[str, Mapping[str, Any]] = MappingProxyType({
    'foruser': {'type': UserSummary},
    'requestedbyuser': {'type': UserSummary, 'optional': True},
    'dpouser': {'type': UserSummary, 'optional': True},
    'messagehtml': {'type': str, 'optional': True},
    'typename': {'type': str},
    'typenameshort': {'type': str},
    'statuslabel': {'type': str},
    'statuslabelclass': {'type': str},
    'canreview': {'type': bool, 'optional': True, 'default': False},
})


@dataclass(frozen=True)
class DataRequestViewModel:
    """Flattened, presentation-ready view of a data request."""

    foruser: UserSummary
    typename: str
    typenameshort: str
    statuslabel: str
    statuslabelclass: str

    requestedbyuser: Optional[UserSummary] = None
    dpouser: Optional[UserSummary] = None
    messagehtml: Optional[str] = None
    canreview: bool = False

    # Stored request properties (id, type, status, ...)
    record: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        """Freeze the record mapping."""
        if not isinstance(self.record, MappingProxyType):
            object.__setattr__(self, 'record', MappingProxyType(dict(self.record)))

    def validate(self) -> List[str]:
        """Check derived fields against VIEW_MODEL_PROPERTIES."""
        errors = []

        for name, definition in VIEW_MODEL_PROPERTIES.items():
            value = getattr(self, name)
            if value is None:
                if not definition.get('optional'):
                    errors.append(f"{name} is required")
                continue
            if not isinstance(value, definition['type']):
                errors.append(
                    f"{name} must be {definition['type'].__name__}, got {type(value).__name__}"
                )

        return errors

    def check(self) -> "DataRequestViewModel":
        """Raise ValidationError if the view model is malformed; return self."""
        errors = self.validate()
        if errors:
            raise ValidationError("; ".join(errors), field="viewmodel", value=self.record.get('id'))
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire mapping; absent optional users are omitted."""
        values = dict(self.record)
        values['foruser'] = self.foruser.to_dict()

        if self.requestedbyuser is not None:
            values['requestedbyuser'] = self.requestedbyuser.to_dict()

        if self.dpouser is not None:
            values['dpouser'] = self.dpouser.to_dict()

        if self.messagehtml is not None:
            values['messagehtml'] = self.messagehtml

        values['typename'] = self.typename
        values['typenameshort'] = self.typenameshort
        values['statuslabel'] = self.statuslabel
        values['statuslabelclass'] = self.statuslabelclass
        values['canreview'] = self.canreview

        return values
