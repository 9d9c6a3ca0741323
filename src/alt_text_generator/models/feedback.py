"""Feedback and training data models."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class FeedbackInput:
    """A user's judgment of one generated alt text, as submitted."""

    rating: int
    generated_alt_text: str = ""
    user_improvement: Optional[str] = None  # Only set when the user edited the text
    image_type: Optional[str] = None  # MIME type of the source image
    helpful: bool = False

    def __post_init__(self):
        if not self.user_improvement:
            self.user_improvement = None


@dataclass
class FeedbackRecord:
    """A stored feedback entry. Immutable once written."""

    id: str
    timestamp: str
    rating: Optional[int]
    generated_alt_text: str = ""
    user_improvement: Optional[str] = None
    image_type: Optional[str] = None
    helpful: bool = False

    @classmethod
    def from_input(cls, feedback: FeedbackInput, record_id: str, timestamp: str) -> "FeedbackRecord":
        return cls(
            id=record_id,
            timestamp=timestamp,
            rating=feedback.rating,
            generated_alt_text=feedback.generated_alt_text,
            user_improvement=feedback.user_improvement,
            image_type=feedback.image_type,
            helpful=feedback.helpful,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "FeedbackRecord":
        """Build a record from its stored JSON form."""
        rating = data.get("rating")
        if isinstance(rating, float) and rating.is_integer():
            rating = int(rating)
        elif isinstance(rating, bool) or not isinstance(rating, int):
            rating = None

        return cls(
            id=str(data.get("id", "")),
            timestamp=data.get("timestamp", ""),
            rating=rating,
            generated_alt_text=data.get("generatedAltText") or "",
            user_improvement=data.get("userImprovement") or None,
            image_type=data.get("imageType") or None,
            helpful=bool(data.get("helpful", False)),
        )

    def to_dict(self) -> dict:
        """Stored JSON form. Absent optional fields are omitted."""
        data = {"generatedAltText": self.generated_alt_text}
        if self.user_improvement is not None:
            data["userImprovement"] = self.user_improvement
        data["rating"] = self.rating
        if self.image_type is not None:
            data["imageType"] = self.image_type
        data["helpful"] = self.helpful
        data["timestamp"] = self.timestamp
        data["id"] = self.id
        return data


@dataclass
class ChatMessage:
    """One turn of a chat-format training example."""

    role: str  # system/user/assistant
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass
class TrainingExample:
    """A prompt/response example in the fine-tuning chat format."""

    messages: list[ChatMessage] = field(default_factory=list)

    @property
    def assistant_reply(self) -> str:
        for message in reversed(self.messages):
            if message.role == "assistant":
                return message.content
        return ""

    @classmethod
    def from_dict(cls, data: dict) -> "TrainingExample":
        return cls(messages=[
            ChatMessage(role=m["role"], content=m["content"])
            for m in data.get("messages", [])
        ])

    def to_dict(self) -> dict:
        return {"messages": [m.to_dict() for m in self.messages]}
