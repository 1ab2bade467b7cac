"""Builds public user summaries for exported requests."""

from typing import Optional

from dataprivacy.core.interfaces import UserSummaryBuilder
from dataprivacy.models.config import ExporterConfiguration
from dataprivacy.models.request import RenderContext, User
from dataprivacy.models.view_model import UserSummary


class UserSummaryExporter(UserSummaryBuilder):
    """Default UserSummaryBuilder driven by ExporterConfiguration."""

    def __init__(self, config: Optional[ExporterConfiguration] = None):
        self.config = config or ExporterConfiguration()

    def build(self, user: User, render_context: Optional[RenderContext] = None) -> UserSummary:
        """Build a summary for the given user."""
        wwwroot = self._wwwroot(render_context)

        return UserSummary(
            id=user.id,
            fullname=self.fullname(user),
            email=user.email,
            idnumber=user.idnumber,
            phone1=user.phone1,
            phone2=user.phone2,
            department=user.department,
            institution=user.institution,
            identity=self.identity(user),
            profileurl=f"{wwwroot}/user/profile.php?id={user.id}",
            profileimageurl=f"{wwwroot}/user/pix.php/{user.id}/f1.jpg",
            profileimageurlsmall=f"{wwwroot}/user/pix.php/{user.id}/f2.jpg",
        )

    def fullname(self, user: User) -> str:
        """Format the display name of a user."""
        name = self.config.fullname_format.format(
            firstname=user.firstname, lastname=user.lastname
        ).strip()
        return name or user.username

    def identity(self, user: User) -> str:
        """Join the configured identity fields that have a value."""
        values = [getattr(user, name) for name in self.config.identity_fields]
        return ", ".join(value for value in values if value)

    def _wwwroot(self, render_context: Optional[RenderContext]) -> str:
        if render_context is not None and render_context.wwwroot:
            return render_context.wwwroot.rstrip("/")
        return self.config.wwwroot.rstrip("/")
