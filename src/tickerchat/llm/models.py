from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TurnRole(str, Enum):
    """Role of a turn in the model context window."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Turn(BaseModel):
    """One role-tagged unit of conversational context sent to the model."""

    model_config = ConfigDict(frozen=True)

    role: TurnRole = Field(description="Role of the message sender: 'system', 'user' or 'assistant'")
    content: str = Field(description="Content of the message")

    def to_wire(self) -> dict[str, str]:
        """Convert to the plain dict shape chat APIs expect."""
        return {"role": self.role.value, "content": self.content}


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
