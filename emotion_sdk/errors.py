from typing import Optional

from pydantic import BaseModel


class ClientError(BaseModel):
	"""Inner object of the service error envelope ``{"error": {...}}``."""
	code: str = ""
	message: str = ""


class WrappedClientError(BaseModel):
	error: Optional[ClientError] = None


class EmotionClientError(Exception):
	"""Base class for every failure raised by the client."""


class MalformedResponseError(EmotionClientError):
	def __init__(self, detail: str, http_status: int = 200):
		super().__init__(f"Malformed response (HTTP {http_status}): {detail}")
		self.detail = detail
		self.http_status = http_status


class ServiceError(EmotionClientError):
	"""The service answered with a non-2xx status and a structured error body."""

	def __init__(self, error: ClientError, http_status: int):
		super().__init__(f"{error.code}: {error.message} (HTTP {http_status})")
		self.error = error
		self.http_status = http_status

	@property
	def code(self) -> str:
		return self.error.code

	@property
	def message(self) -> str:
		return self.error.message


class TransportError(EmotionClientError):
	"""Non-2xx status without a decodable error body, or a network fault.

	``http_status`` is ``None`` when no response was received at all.
	"""

	def __init__(self, http_status: Optional[int] = None, detail: str = ""):
		if http_status is not None:
			text = f"HTTP {http_status}"
			if detail:
				text = f"{text}: {detail}"
		else:
			text = detail or "transport failure"
		super().__init__(text)
		self.http_status = http_status
		self.detail = detail


class RequestCancelledError(EmotionClientError):
	def __init__(self, url: str = ""):
		super().__init__(f"Request cancelled: {url}" if url else "Request cancelled")
		self.url = url
