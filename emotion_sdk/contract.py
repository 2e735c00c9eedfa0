from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
	"""Base for wire models: camelCase on the wire, snake_case in Python."""
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


EMOTION_LABELS: List[str] = [
	"anger", "contempt", "disgust", "fear", "happiness", "neutral", "sadness", "surprise",
]

# contempt is left out of equality and hashing, see DESIGN.md
_EQUALITY_FIELDS = ("anger", "disgust", "fear", "happiness", "neutral", "sadness", "surprise")


class Emotion(ApiModel):
	anger: float = Field(0.0, ge=0.0)
	contempt: float = Field(0.0, ge=0.0)
	disgust: float = Field(0.0, ge=0.0)
	fear: float = Field(0.0, ge=0.0)
	happiness: float = Field(0.0, ge=0.0)
	neutral: float = Field(0.0, ge=0.0)
	sadness: float = Field(0.0, ge=0.0)
	surprise: float = Field(0.0, ge=0.0)

	def to_ranked_list(self) -> List[Tuple[str, float]]:
		"""Scores as ``(Label, score)`` pairs, highest score first.

		The label is the secondary key so that ties come out in a stable,
		alphabetical order.
		"""
		pairs = [(name.capitalize(), getattr(self, name)) for name in EMOTION_LABELS]
		return sorted(pairs, key=lambda kv: (-kv[1], kv[0]))

	@property
	def ranking(self) -> List[Tuple[str, float]]:
		return self.to_ranked_list()

	def top(self) -> Tuple[str, float]:
		return self.to_ranked_list()[0]

	def _key(self) -> Tuple[float, ...]:
		return tuple(getattr(self, name) for name in _EQUALITY_FIELDS)

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Emotion):
			return NotImplemented
		return self._key() == other._key()

	def __hash__(self) -> int:
		return hash(self._key())


class FaceAttributes(ApiModel):
	emotion: Optional[Emotion] = None

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, FaceAttributes):
			return NotImplemented
		return self.emotion == other.emotion

	def __hash__(self) -> int:
		return hash(self.emotion)


class FaceRectangle(ApiModel):
	top: int = 0
	left: int = 0
	width: int = 0
	height: int = 0


class Face(ApiModel):
	face_id: Optional[str] = None
	face_rectangle: Optional[FaceRectangle] = None
	face_attributes: Optional[FaceAttributes] = None

	@property
	def emotion(self) -> Optional[Emotion]:
		return self.face_attributes.emotion if self.face_attributes else None


class UrlRequest(ApiModel):
	url: str
