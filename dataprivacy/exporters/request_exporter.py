"""Exports data requests as flat, presentation-ready view models."""

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from dataprivacy.core.interfaces import (
    HtmlFormatter,
    LabelService,
    RequestStatus,
    RequestType,
    UserLookup,
    UserSummaryBuilder,
)
from dataprivacy.core.validation import ValidationError
from dataprivacy.models.config import ExporterConfiguration
from dataprivacy.models.request import Context, DataRequest, RenderContext
from dataprivacy.models.view_model import (
    DataRequestViewModel,
    UserSummary,
    VIEW_MODEL_PROPERTIES,
)
from dataprivacy.utils.error_handler import ExportErrorHandler


logger = logging.getLogger(__name__)

STRING_COMPONENT = "dataprivacy"

# Request type -> (name string, short name string)
TYPE_LABELS: Mapping[RequestType, Tuple[str, str]] = {
    RequestType.EXPORT: ("requesttypeexport", "requesttypeexportshort"),
    RequestType.DELETE: ("requesttypedelete", "requesttypedeleteshort"),
    RequestType.OTHERS: ("requesttypeothers", "requesttypeothersshort"),
}

# Request status -> (label string, label class suffix)
STATUS_LABELS: Mapping[RequestStatus, Tuple[str, str]] = {
    RequestStatus.PENDING: ("statuspending", "default"),
    RequestStatus.PREPROCESSING: ("statuspreprocessing", "default"),
    RequestStatus.AWAITING_APPROVAL: ("statusawaitingapproval", "info"),
    RequestStatus.APPROVED: ("statusapproved", "info"),
    RequestStatus.PROCESSING: ("statusprocessing", "info"),
    RequestStatus.COMPLETE: ("statuscomplete", "success"),
    RequestStatus.CANCELLED: ("statuscancelled", "warning"),
    RequestStatus.REJECTED: ("statusrejected", "important"),
}

UNKNOWN_STATUS_LABEL = ("statusunknown", "default")

# The DPO can act on a request once it reaches these statuses.
REVIEWABLE_STATUSES = frozenset({RequestStatus.AWAITING_APPROVAL})

_unmapped = (set(RequestType) - set(TYPE_LABELS)) | (set(RequestStatus) - set(STATUS_LABELS))
if _unmapped:
    raise RuntimeError(f"No labels defined for: {sorted(member.name for member in _unmapped)}")


class DataRequestExporter:
    """Builds DataRequestViewModel instances from data requests.

    All lookups go through the injected collaborators; the exporter holds no
    per-call state, so a single instance can be shared.
    """

    def __init__(self,
                 user_lookup: UserLookup,
                 summary_builder: UserSummaryBuilder,
                 label_service: LabelService,
                 html_formatter: HtmlFormatter,
                 config: Optional[ExporterConfiguration] = None):
        self.user_lookup = user_lookup
        self.summary_builder = summary_builder
        self.label_service = label_service
        self.html_formatter = html_formatter
        self.config = config or ExporterConfiguration()

    @staticmethod
    def read_properties_definition() -> Dict[str, Dict[str, Any]]:
        """Describe the derived view model fields for API consumers."""
        definition = {}
        for name, spec in VIEW_MODEL_PROPERTIES.items():
            entry = dict(spec)
            entry['type'] = 'user_summary' if spec['type'] is UserSummary else spec['type'].__name__
            entry.setdefault('optional', False)
            definition[name] = entry
        return definition

    def build(self, request: DataRequest, render_context: RenderContext) -> DataRequestViewModel:
        """Build the view model for a single request.

        Raises NotFoundError if the subject, requester or DPO does not exist
        and ValidationError if the render context or the request is unusable.
        """
        self._check_render_context(render_context)
        language = render_context.language or self.config.language
        log_extra = {"request_id": request.id, "user_id": request.userid}

        foruser = self._summarize_user(request.userid, render_context)

        requestedbyuser = None
        if request.requestedby != request.userid:
            requestedbyuser = self._summarize_user(request.requestedby, render_context)

        dpouser = None
        if request.dpo:
            dpouser = self._summarize_user(request.dpo, render_context)

        typename, typenameshort = self.type_labels(request.type, language)
        statuslabel, statuslabelclass = self.status_label(request.status, language, request_id=request.id)

        view_model = DataRequestViewModel(
            foruser=foruser,
            requestedbyuser=requestedbyuser,
            dpouser=dpouser,
            messagehtml=self.html_formatter.to_html(request.comments),
            typename=typename,
            typenameshort=typenameshort,
            statuslabel=statuslabel,
            statuslabelclass=statuslabelclass,
            canreview=self.can_review(request.status),
            record=request.to_record(),
        ).check()

        logger.debug(f"Exported data request {request.id}", extra=log_extra)
        return view_model

    def export(self, request: DataRequest, render_context: RenderContext) -> Dict[str, Any]:
        """Build the view model and return its wire mapping."""
        return self.build(request, render_context).to_dict()

    def export_many(self,
                    requests: Iterable[DataRequest],
                    render_context: RenderContext,
                    error_handler: Optional[ExportErrorHandler] = None) -> List[DataRequestViewModel]:
        """Build view models for several requests in order.

        Without an error handler the first failure propagates. With one,
        recoverable failures are recorded and the request is skipped. A render
        context without a ``context`` renders each request in its own context.
        """
        view_models = []

        for request in requests:
            request_context = render_context
            if isinstance(render_context, RenderContext) and render_context.context is None:
                request_context = replace(render_context, context=request.context)
            try:
                view_models.append(self.build(request, request_context))
            except Exception as e:
                if error_handler is None or not error_handler.is_recoverable(e):
                    raise
                error_handler.handle_export_error(e, request_id=request.id)

        return view_models

    def type_labels(self, request_type: Any, language: Optional[str] = None) -> Tuple[str, str]:
        """Return (name, short name) for a request type; unknown types count as others."""
        parsed = RequestType.parse(request_type)
        if parsed is None:
            logger.debug(f"Unrecognized request type {request_type!r}, labelling as others")
            parsed = RequestType.OTHERS

        name_key, short_key = TYPE_LABELS[parsed]
        return self._get_string(name_key, language), self._get_string(short_key, language)

    def status_label(self, status: Any, language: Optional[str] = None,
                     request_id: Optional[int] = None) -> Tuple[str, str]:
        """Return (label, label class) for a request status."""
        parsed = RequestStatus.parse(status)

        if parsed is None:
            if self.config.strict_status:
                raise ValidationError("unknown request status", field="status", value=status)
            logger.warning(
                f"Unknown status {status!r} on data request {request_id}, using fallback label",
                extra={"request_id": request_id},
            )
            label_key, class_suffix = UNKNOWN_STATUS_LABEL
        else:
            label_key, class_suffix = STATUS_LABELS[parsed]

        return self._get_string(label_key, language), f"{self.config.label_class_prefix}{class_suffix}"

    @staticmethod
    def can_review(status: Any) -> bool:
        """Check if a request in this status is ready for DPO review."""
        return RequestStatus.parse(status) in REVIEWABLE_STATUSES

    def _summarize_user(self, user_id: int, render_context: RenderContext) -> UserSummary:
        user = self.user_lookup.get_user(user_id, must_exist=True)
        logger.debug(f"Resolved user {user_id}")
        return self.summary_builder.build(user, render_context)

    def _get_string(self, identifier: str, language: Optional[str]) -> str:
        return self.label_service.get_string(identifier, STRING_COMPONENT, language=language)

    @staticmethod
    def _check_render_context(render_context: Any) -> None:
        if not isinstance(render_context, RenderContext):
            raise ValidationError("a RenderContext is required", field="render_context")
        if not isinstance(render_context.context, Context):
            raise ValidationError("related object 'context' is missing or invalid", field="context",
                                  value=render_context.context)
