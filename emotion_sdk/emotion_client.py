import logging
import threading
from typing import Any, List, Optional

import requests

from . import config
from .contract import Face, UrlRequest
from .service_client import Credentials, ServiceClient

log = logging.getLogger(__name__)


class EmotionServiceClient(ServiceClient):
	"""Client for the face detect endpoint with emotion attributes."""

	def __init__(self, subscription_key: str, api_root: str = config.API_ROOT,
			session: Optional[requests.Session] = None, timeout: float = config.TIMEOUT):
		super().__init__(
			api_root=api_root.rstrip("/"),
			credentials=Credentials(value=subscription_key),
			session=session,
			timeout=timeout,
		)

	def detect(self, image: Any, cancel: Optional[threading.Event] = None) -> List[Face]:
		"""Detect faces in an image given as a binary stream or bytes."""
		return self.post(config.DETECT_PATH, image, List[Face], cancel)

	def detect_url(self, url: str, cancel: Optional[threading.Event] = None) -> List[Face]:
		"""Detect faces in an image the service fetches from ``url``."""
		return self.post(config.DETECT_PATH, UrlRequest(url=url), List[Face], cancel)


def _is_blank(value: Optional[str], prompt: str) -> bool:
	return not value or not value.strip() or value == prompt


class ScenarioContext:
	"""Holds the last entered subscription key and endpoint for one session.

	The credential page writes here and whatever issues requests reads from
	it, so the two never share module-level state.
	"""

	def __init__(self, subscription_key: str = "", endpoint: str = ""):
		self.subscription_key = subscription_key
		self.endpoint = endpoint

	def set_credentials(self, subscription_key: str, endpoint: str) -> None:
		self.subscription_key = subscription_key
		self.endpoint = endpoint

	@property
	def has_key(self) -> bool:
		return not _is_blank(self.subscription_key, config.KEY_PROMPT)

	@property
	def api_root(self) -> str:
		if _is_blank(self.endpoint, config.ENDPOINT_PROMPT):
			return config.API_ROOT
		return self.endpoint.strip().rstrip("/")

	def make_client(self, session: Optional[requests.Session] = None) -> EmotionServiceClient:
		if not self.has_key:
			raise ValueError("No subscription key has been entered")
		log.debug("Creating client for %s", self.api_root)
		return EmotionServiceClient(self.subscription_key.strip(), self.api_root, session=session)
