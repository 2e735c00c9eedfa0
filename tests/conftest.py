import io
import json

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from emotion_sdk.service_client import Credentials, ServiceClient

API_ROOT = "https://api.test/face/v1.0"


class FakeAdapter(BaseAdapter):
	"""Transport adapter that answers from a queue instead of the network."""

	def __init__(self):
		super().__init__()
		self.queued = []
		self.sent = []
		self.on_send = None
		self.make_raw = io.BytesIO

	def reply(self, status=200, body=b"", content_type=None, reason=""):
		if isinstance(body, (dict, list)):
			body = json.dumps(body)
			content_type = content_type or "application/json; charset=utf-8"
		if isinstance(body, str):
			body = body.encode("utf-8")
		headers = {"Content-Type": content_type} if content_type else {}
		self.queued.append((status, body, headers, reason))

	def fail(self, exc):
		self.queued.append(exc)

	def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
		self.sent.append(request)
		if self.on_send is not None:
			self.on_send(request)
		item = self.queued.pop(0)
		if isinstance(item, Exception):
			raise item
		status, body, headers, reason = item
		resp = requests.Response()
		resp.status_code = status
		resp.reason = reason
		resp.headers = CaseInsensitiveDict(headers)
		resp.encoding = get_encoding_from_headers(resp.headers)
		resp.raw = self.make_raw(body)
		resp.url = request.url
		resp.request = request
		return resp

	def close(self):
		pass


@pytest.fixture
def adapter():
	return FakeAdapter()


@pytest.fixture
def session(adapter):
	s = requests.Session()
	s.mount("https://", adapter)
	s.mount("http://", adapter)
	yield s
	s.close()


@pytest.fixture
def client(session):
	with ServiceClient(API_ROOT, Credentials(value="secret-key"), session=session) as c:
		yield c
