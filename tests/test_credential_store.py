import os

import pytest

from emotion_sdk import config
from emotion_sdk.credential_store import SubscriptionStore


@pytest.fixture
def store(tmp_path):
	return SubscriptionStore(str(tmp_path / "store"))


class TestSubscriptionStore:
	def test_missing_record_gives_prompts(self, store):
		assert store.load() == (config.KEY_PROMPT, config.ENDPOINT_PROMPT)

	def test_save_and_load(self, store):
		store.save("abc123", "https://westeurope.api.test/face/v1.0")
		assert store.load() == ("abc123", "https://westeurope.api.test/face/v1.0")
		with open(store.path) as f:
			assert f.read() == "abc123\nhttps://westeurope.api.test/face/v1.0\n"

	def test_blank_endpoint(self, store):
		store.save("abc123", "")
		assert store.load() == ("abc123", config.ENDPOINT_PROMPT)

	def test_prompts_are_not_persisted(self, store):
		store.save(config.KEY_PROMPT, config.ENDPOINT_PROMPT)
		with open(store.path) as f:
			assert f.read() == "\n\n"

	def test_delete_clears_both(self, store):
		store.save("abc123", "https://api.test")
		assert store.delete() == (config.KEY_PROMPT, config.ENDPOINT_PROMPT)
		assert store.load() == (config.KEY_PROMPT, config.ENDPOINT_PROMPT)
		assert os.path.exists(store.path)

	def test_unreadable_record_gives_prompts(self, tmp_path):
		os.makedirs(tmp_path / config.STORE_FILE)
		assert SubscriptionStore(str(tmp_path)).load() == (config.KEY_PROMPT, config.ENDPOINT_PROMPT)

	def test_write_failure_is_raised(self, tmp_path):
		blocker = tmp_path / "not-a-dir"
		blocker.write_text("x")
		with pytest.raises(OSError):
			SubscriptionStore(str(blocker)).save("abc", "")

	def test_line_breaks_inside_a_value_are_dropped(self, store):
		store.save("ab\rc\r\n12", "https://api.test\r")
		assert store.load() == ("abc12", "https://api.test")
