"""User references and profiles supplied by the directory."""

from pydantic import BaseModel, Field


class UserRef(BaseModel):
    """A user known by one universal id and any number of aliases.

    Aliases are typically e-mail addresses the user has registered.
    """

    universal_id: str = Field(description="Canonical user identity")
    aliases: list[str] = Field(
        default_factory=list,
        description="Other ids or e-mail addresses for the same user",
    )

    def has_any_id(self, value: str) -> bool:
        """Check whether value matches this user's id or any alias."""
        needle = value.strip().lower()
        if not needle:
            return False
        return any(needle == known.lower() for known in self.all_ids())

    def all_ids(self) -> list[str]:
        """Universal id followed by every alias."""
        return [self.universal_id, *self.aliases]


class UserProfile(BaseModel):
    """Directory entry for a user, used for addressing and date formatting."""

    user_id: str = Field(description="Universal id of the user")
    name: str = Field(description="Display name")
    email: str | None = Field(default=None, description="Preferred e-mail address")
    timezone: str = Field(default="UTC", description="IANA timezone name")
    aliases: list[str] = Field(default_factory=list)

    def to_ref(self) -> UserRef:
        """Build a UserRef carrying every known id for this profile."""
        aliases = list(self.aliases)
        if self.email and self.email not in aliases:
            aliases.append(self.email)
        return UserRef(universal_id=self.user_id, aliases=aliases)
