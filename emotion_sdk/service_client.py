import io
import json
import logging
import threading
import weakref
from functools import lru_cache
from typing import Any, Optional, get_origin
from urllib.parse import urlsplit

import requests
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import to_jsonable_python

from . import config
from .errors import (
	MalformedResponseError,
	RequestCancelledError,
	ServiceError,
	TransportError,
	WrappedClientError,
)

log = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
STREAM_CONTENT_TYPE = "application/octet-stream"


class Credentials(BaseModel):
	"""Authorization header sent with every request."""
	model_config = ConfigDict(frozen=True)

	value: str
	header: str = config.AUTH_HEADER


def is_relative(path: str) -> bool:
	parts = urlsplit(path)
	return not parts.scheme and not parts.netloc


def _camelize(value: Any) -> Any:
	if isinstance(value, dict):
		return {
			(to_camel(k) if isinstance(k, str) else k): _camelize(v)
			for k, v in value.items()
			if v is not None
		}
	if isinstance(value, list):
		return [_camelize(v) for v in value]
	return value


def to_json(body: Any) -> str:
	"""Serialize a request body: camelCase names, no nulls, ISO-8601 dates."""
	data = to_jsonable_python(body, by_alias=False, exclude_none=True)
	return json.dumps(_camelize(data))


def _is_stream(body: Any) -> bool:
	return isinstance(body, (bytes, bytearray, io.IOBase)) or hasattr(body, "read")


def _is_success(status: int) -> bool:
	return 200 <= status < 300


def _is_json(response: requests.Response) -> bool:
	return "application/json" in response.headers.get("Content-Type", "").lower()


def _empty_value(response_type: Any) -> Any:
	origin = get_origin(response_type) or response_type
	if origin is list:
		return []
	if origin is dict:
		return {}
	return None


@lru_cache(maxsize=64)
def _adapter(response_type: Any) -> TypeAdapter:
	return TypeAdapter(response_type)


def _raise_if_cancelled(cancel: Optional[threading.Event], url: str) -> None:
	if cancel is not None and cancel.is_set():
		raise RequestCancelledError(url)


def read_content(response: requests.Response, cancel: Optional[threading.Event] = None) -> str:
	"""Read the body text that :func:`decode` is allowed to look at.

	Success responses are read in full. Failure responses are only read when
	they declare a JSON content type, otherwise the detail is not
	retrievable and the content is empty.
	"""
	if not _is_success(response.status_code) and not _is_json(response):
		return ""
	chunks = []
	try:
		for chunk in response.iter_content(chunk_size=config.CHUNK_SIZE):
			_raise_if_cancelled(cancel, response.url)
			chunks.append(chunk)
	except requests.RequestException as e:
		raise TransportError(response.status_code, str(e)) from e
	return b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")


def decode(response: requests.Response, content: str, response_type: Any = Any) -> Any:
	status = response.status_code
	if _is_success(status):
		if not content.strip():
			return _empty_value(response_type)
		try:
			return _adapter(response_type).validate_json(content)
		except ValidationError as e:
			log.warning("Malformed response from %s: %s", response.url, e)
			raise MalformedResponseError(str(e), status) from e

	if content and _is_json(response):
		try:
			wrapped = WrappedClientError.model_validate_json(content)
		except ValidationError:
			wrapped = None
		if wrapped is not None and wrapped.error is not None:
			log.warning("Service error from %s: %s (HTTP %s)", response.url, wrapped.error.code, status)
			raise ServiceError(wrapped.error, status)

	log.warning("HTTP %s from %s", status, response.url)
	raise TransportError(status, response.reason or "")


class ServiceClient:
	"""JSON-over-HTTP client for one API root and one set of credentials.

	Pass ``session`` to share a :class:`requests.Session` (for example one
	with a mounted test adapter); it is then borrowed and never closed here.
	Without it the client creates its own session and closes it on
	:meth:`close`, on ``with`` exit, or when the client is garbage collected.
	"""

	def __init__(self, api_root: str, credentials: Credentials,
			session: Optional[requests.Session] = None, timeout: float = config.TIMEOUT):
		self._api_root = api_root
		self._credentials = credentials
		self.timeout = timeout
		self._owns_session = session is None
		self._session = requests.Session() if session is None else session
		self._closed = False
		# last resort for owned sessions; close() or a with block releases promptly
		self._finalizer = weakref.finalize(self, self._session.close) if self._owns_session else None

	@property
	def api_root(self) -> str:
		return self._api_root

	@property
	def credentials(self) -> Credentials:
		return self._credentials

	@property
	def session(self) -> requests.Session:
		return self._session

	@property
	def owns_session(self) -> bool:
		return self._owns_session

	@property
	def closed(self) -> bool:
		return self._closed

	def close(self) -> None:
		if self._closed:
			return
		self._closed = True
		if self._finalizer is not None:
			self._finalizer()

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc, tb):
		self.close()

	def build_request(self, method: str, path: str, body: Any = None) -> requests.Request:
		url = self._api_root + path if is_relative(path) else path
		headers = {self._credentials.header: self._credentials.value}
		data = None
		if body is not None:
			if _is_stream(body):
				headers["Content-Type"] = STREAM_CONTENT_TYPE
				data = bytes(body) if isinstance(body, bytearray) else body
			else:
				headers["Content-Type"] = JSON_CONTENT_TYPE
				data = to_json(body).encode("utf-8")
		return requests.Request(method, url, headers=headers, data=data)

	def send(self, method: str, path: str, body: Any = None, response_type: Any = Any,
			cancel: Optional[threading.Event] = None) -> Any:
		if self._closed:
			raise RuntimeError("ServiceClient is closed")
		request = self.build_request(method, path, body)
		_raise_if_cancelled(cancel, request.url)
		try:
			prepared = self._session.prepare_request(request)
			log.debug("%s %s", method, prepared.url)
			response = self._session.send(prepared, stream=True, timeout=self.timeout)
		except requests.RequestException as e:
			_raise_if_cancelled(cancel, request.url)
			log.warning("%s %s failed: %s", method, request.url, e)
			raise TransportError(detail=str(e)) from e

		with response:
			log.debug("%s %s -> %s", method, prepared.url, response.status_code)
			_raise_if_cancelled(cancel, request.url)
			content = read_content(response, cancel)
		return decode(response, content, response_type)

	def get(self, path: str, response_type: Any = Any, cancel: Optional[threading.Event] = None) -> Any:
		return self.send("GET", path, None, response_type, cancel)

	def post(self, path: str, body: Any, response_type: Any = Any,
			cancel: Optional[threading.Event] = None) -> Any:
		return self.send("POST", path, body, response_type, cancel)
