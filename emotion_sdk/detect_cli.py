import argparse
import csv
import logging
import os
from typing import List

from . import config
from .contract import EMOTION_LABELS
from .credential_store import SubscriptionStore
from .emotion_client import ScenarioContext
from .errors import EmotionClientError

log = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp", ".gif")


def collect_images(path: str) -> List[str]:
	if os.path.isdir(path):
		items = []
		for root, _, files in os.walk(path):
			for f in files:
				if f.lower().endswith(IMAGE_EXTENSIONS):
					items.append(os.path.join(root, f))
		return sorted(items)
	return [path]


def resolve_context(key: str, endpoint: str, store: SubscriptionStore) -> ScenarioContext:
	"""Command-line values win, then the saved record, then the environment."""
	stored_key, stored_endpoint = store.load()
	ctx = ScenarioContext(stored_key, stored_endpoint)
	if not ctx.has_key:
		ctx.subscription_key = config.API_KEY
	if key:
		ctx.subscription_key = key
	if endpoint:
		ctx.endpoint = endpoint
	return ctx


def main(argv=None):
	ap = argparse.ArgumentParser(description="Detect face emotions through the API and write CSV results")
	ap.add_argument("--input", required=True, help="Image file or directory")
	ap.add_argument("--out", default="emotion_results.csv")
	ap.add_argument("--key", default="", help="Subscription key (defaults to the saved one)")
	ap.add_argument("--endpoint", default="", help="API root (defaults to the saved one)")
	ap.add_argument("--store-dir", default=None, help="Directory of the saved credentials")
	ap.add_argument("--log-level", default="INFO", type=str.upper, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
	args = ap.parse_args(argv)

	logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

	ctx = resolve_context(args.key, args.endpoint, SubscriptionStore(args.store_dir))
	if not ctx.has_key:
		ap.error("no subscription key: pass --key, save one in the UI or set EMOTION_API_KEY")

	paths = collect_images(args.input)
	failed = 0
	with ctx.make_client() as client, open(args.out, "w", newline="") as f:
		writer = csv.writer(f)
		writer.writerow(["path", "face", "emotion"] + EMOTION_LABELS)
		for p in paths:
			try:
				with open(p, "rb") as img:
					faces = client.detect(img)
			except (EmotionClientError, OSError) as e:
				log.error("%s: %s", p, e)
				failed += 1
				continue
			log.info("%s: %d face(s)", p, len(faces))
			for i, face in enumerate(faces):
				emo = face.emotion
				if emo is None:
					continue
				label, _ = emo.top()
				writer.writerow([p, i, label.lower()] + [getattr(emo, lbl) for lbl in EMOTION_LABELS])
	print("Wrote", args.out)
	return 1 if failed and failed == len(paths) else 0


if __name__ == "__main__":
	raise SystemExit(main())
