"""
Caller identity.

WHAT: Opaque principal token attached to every call
WHY: Identities are compared by value and never rebuilt from loose strings
HOW: Frozen pydantic model with an anonymous sentinel
"""

from pydantic import BaseModel, ConfigDict, Field

from ..utils.exceptions import ValidationException


ANONYMOUS_PRINCIPAL = "anonymous"


class CallerId(BaseModel):
    """Authenticated principal on whose behalf a call executes."""

    model_config = ConfigDict(frozen=True)

    principal: str = Field(min_length=1)

    @classmethod
    def anonymous(cls) -> "CallerId":
        return cls(principal=ANONYMOUS_PRINCIPAL)

    @classmethod
    def from_header(cls, value: str | None) -> "CallerId":
        """Build an identity from a transport header; missing means anonymous."""
        if value is None or not value.strip():
            return cls.anonymous()
        return cls(principal=value.strip())

    def is_anonymous(self) -> bool:
        return self.principal == ANONYMOUS_PRINCIPAL

    def __str__(self) -> str:
        return self.principal


def require_authenticated(caller: CallerId, action: str):
    """Reject anonymous callers for mutating operations."""
    if caller.is_anonymous():
        raise ValidationException(f"Anonymous callers cannot {action}", field="caller")
