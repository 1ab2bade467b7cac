"""Input models: data requests, users and the context they are rendered in."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from datetime import datetime, timezone

from dataprivacy.core.interfaces import (
    ContextLevel,
    CreationMethod,
    RequestStatus,
    RequestType,
)
from dataprivacy.core.validation import RequestValidator, ValidationError


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Accept datetimes, epoch seconds or ISO 8601 strings."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            raise ValidationError("invalid timestamp", value=value)
    raise ValidationError("invalid timestamp", value=value)


def _parse_id(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _parse_format(data: Dict[str, Any], name: str) -> int:
    """Read a text format code; absent means 0, null or non-integers are rejected."""
    value = data.get(name, 0)
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationError("must be an integer format code", field=name, value=value)
    try:
        return int(value)
    except ValueError:
        raise ValidationError("must be an integer format code", field=name, value=value)


def _parse_bool(value: Any) -> bool:
    """Accept booleans, numbers and the strings true/false, yes/no, on/off."""
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return bool(value)


@dataclass(frozen=True)
class Context:
    """The context a request belongs to."""
    id: int
    contextlevel: ContextLevel = ContextLevel.SYSTEM
    instanceid: int = 0

    @classmethod
    def system(cls) -> "Context":
        """The system context."""
        return cls(id=1, contextlevel=ContextLevel.SYSTEM, instanceid=0)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Context":
        """Create a context from a plain mapping."""
        return cls(
            id=int(data["id"]),
            contextlevel=ContextLevel(data.get("contextlevel", ContextLevel.SYSTEM.value)),
            instanceid=int(data.get("instanceid", 0)),
        )


@dataclass(frozen=True)
class RenderContext:
    """Rendering details passed alongside every export call."""
    context: Optional[Context]
    language: Optional[str] = None
    wwwroot: Optional[str] = None


@dataclass(frozen=True)
class User:
    """A user record as returned by the user directory."""
    id: int
    username: str = ""
    firstname: str = ""
    lastname: str = ""
    email: str = ""
    idnumber: str = ""
    department: str = ""
    institution: str = ""
    phone1: str = ""
    phone2: str = ""
    deleted: bool = False
    suspended: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create a user from a plain mapping, ignoring unknown keys."""
        known = {name for name in cls.__dataclass_fields__}
        values = {key: value for key, value in data.items() if key in known}
        if "id" not in values:
            raise ValidationError("id is required", field="id")
        values["id"] = int(values["id"])
        for name in ("deleted", "suspended"):
            if name in values:
                values[name] = bool(values[name])
        return cls(**values)


@dataclass(frozen=True)
class DataRequest:
    """A persisted data request, passed in read-only.

    ``type`` and ``status`` normally hold RequestType/RequestStatus members but
    may carry raw values that match neither; the exporter decides how those are
    labelled.
    """

    id: int
    userid: int
    requestedby: int
    type: Union[RequestType, Any] = RequestType.EXPORT
    status: Union[RequestStatus, Any] = RequestStatus.PENDING

    comments: Optional[str] = None
    commentsformat: int = 0
    dpo: Optional[int] = None
    dpocomment: Optional[str] = None
    dpocommentformat: int = 0

    creationmethod: CreationMethod = CreationMethod.WEB
    systemapproved: bool = False

    timecreated: Optional[datetime] = None
    timemodified: Optional[datetime] = None
    usermodified: Optional[int] = None

    context: Context = field(default_factory=Context.system)

    @property
    def has_dpo(self) -> bool:
        """Check if a data protection officer is assigned."""
        return bool(self.dpo)

    @property
    def is_self_request(self) -> bool:
        """Check if the subject filed the request themselves."""
        return self.requestedby == self.userid

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataRequest":
        """Create a request from a plain mapping (JSON or YAML input)."""
        RequestValidator.check_record(data)

        raw_type = data.get("type", RequestType.EXPORT.value)
        raw_status = data.get("status", RequestStatus.PENDING.value)
        context = data.get("context")
        if context is not None and not isinstance(context, dict):
            raise ValidationError("must be a mapping", field="context", value=context)

        return cls(
            id=int(data["id"]),
            userid=int(data["userid"]),
            requestedby=int(data["requestedby"]),
            type=RequestType.parse(raw_type) or raw_type,
            status=RequestStatus.parse(raw_status) or raw_status,
            comments=data.get("comments"),
            commentsformat=_parse_format(data, "commentsformat"),
            dpo=_parse_id(data.get("dpo")),
            dpocomment=data.get("dpocomment"),
            dpocommentformat=_parse_format(data, "dpocommentformat"),
            creationmethod=CreationMethod(data.get("creationmethod", CreationMethod.WEB.value)),
            systemapproved=_parse_bool(data.get("systemapproved", False)),
            timecreated=_parse_timestamp(data.get("timecreated")),
            timemodified=_parse_timestamp(data.get("timemodified")),
            usermodified=_parse_id(data.get("usermodified")),
            context=Context.from_dict(context) if context else Context.system(),
        )

    def to_record(self) -> Dict[str, Any]:
        """Convert the stored properties to a plain dictionary."""
        return {
            'id': self.id,
            'type': self.type.value if isinstance(self.type, RequestType) else self.type,
            'status': self.status.value if isinstance(self.status, RequestStatus) else self.status,
            'userid': self.userid,
            'requestedby': self.requestedby,
            'dpo': self.dpo,
            'comments': self.comments,
            'commentsformat': self.commentsformat,
            'dpocomment': self.dpocomment,
            'dpocommentformat': self.dpocommentformat,
            'creationmethod': self.creationmethod.value,
            'systemapproved': self.systemapproved,
            'timecreated': self.timecreated.isoformat() if self.timecreated else None,
            'timemodified': self.timemodified.isoformat() if self.timemodified else None,
            'usermodified': self.usermodified,
        }
