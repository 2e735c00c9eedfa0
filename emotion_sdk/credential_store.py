import logging
import os
from typing import Optional, Tuple

from . import config

log = logging.getLogger(__name__)


class SubscriptionStore:
	"""Two-line text record ``key\\nendpoint`` in a per-user directory.

	Reading never fails: a missing, unreadable or blank field comes back as
	its prompt string. Writing raises ``OSError`` to the caller.
	"""

	def __init__(self, directory: Optional[str] = None, filename: str = config.STORE_FILE):
		self.directory = directory or config.STORE_DIR
		self.path = os.path.join(self.directory, filename)

	def load(self) -> Tuple[str, str]:
		lines = []
		if os.path.exists(self.path):
			try:
				with open(self.path, "r", encoding="utf-8") as f:
					lines = f.read().splitlines()
			except (OSError, UnicodeDecodeError) as e:
				log.info("Ignoring unreadable credential record %s: %s", self.path, e)
				lines = []
		key = lines[0].strip() if len(lines) > 0 else ""
		endpoint = lines[1].strip() if len(lines) > 1 else ""
		return key or config.KEY_PROMPT, endpoint or config.ENDPOINT_PROMPT

	def save(self, subscription_key: str, endpoint: str) -> None:
		os.makedirs(self.directory, exist_ok=True)
		with open(self.path, "w", encoding="utf-8") as f:
			f.write(f"{_clean(subscription_key, config.KEY_PROMPT)}\n{_clean(endpoint, config.ENDPOINT_PROMPT)}\n")

	def delete(self) -> Tuple[str, str]:
		self.save("", "")
		return config.KEY_PROMPT, config.ENDPOINT_PROMPT


def _clean(value: Optional[str], prompt: str) -> str:
	# a prompt string is never a real value
	if not value or value == prompt:
		return ""
	return "".join(value.strip().splitlines())
