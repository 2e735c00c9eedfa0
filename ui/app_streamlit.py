import io

import pandas as pd
import streamlit as st
from PIL import Image

from emotion_sdk import config
from emotion_sdk.credential_store import SubscriptionStore
from emotion_sdk.emotion_client import ScenarioContext
from emotion_sdk.errors import EmotionClientError, ServiceError

st.set_page_config(page_title="Emotion API Sample", layout="centered")
st.title("Facial Emotion Recognition")

store = SubscriptionStore()

# One context per browser session; the page fills it, the detect panel reads it
if "ctx" not in st.session_state:
	key, endpoint = store.load()
	st.session_state.ctx = ScenarioContext(key, endpoint)
	st.session_state.key_input = key
	st.session_state.endpoint_input = endpoint
ctx = st.session_state.ctx

st.subheader("Subscription")
st.write("Images you upload are sent to the emotion API for processing. "
	"The subscription key and endpoint are saved on this machine only when you press Save.")

st.text_input("Subscription key", key="key_input")
st.text_input("Endpoint", key="endpoint_input")
ctx.set_credentials(st.session_state.key_input, st.session_state.endpoint_input)


def _delete_credentials():
	try:
		key, endpoint = store.delete()
	except OSError as e:
		st.session_state.store_message = ("error", f"Fail to delete subscription key. Error message: {e}")
		return
	st.session_state.key_input = key
	st.session_state.endpoint_input = endpoint
	ctx.set_credentials(key, endpoint)
	st.session_state.store_message = ("success", "Subscription key is deleted from your disk.")


col1, col2, col3 = st.columns(3)
with col1:
	if st.button("Save"):
		try:
			store.save(ctx.subscription_key, ctx.endpoint)
			st.session_state.store_message = ("success", "Subscription key and endpoint is saved in your disk. "
				"You do not need to paste the key next time.")
		except OSError as e:
			st.session_state.store_message = ("error", f"Fail to save subscription & endpoint key. Error message: {e}")
with col2:
	st.button("Delete", on_click=_delete_credentials)
with col3:
	st.link_button("Get Key", config.SIGNUP_URL)

message = st.session_state.pop("store_message", None)
if message:
	kind, text = message
	(st.success if kind == "success" else st.error)(text)


def render_probability_chart(ranking):
	df = pd.DataFrame(ranking, columns=["label", "score"]).set_index("label")
	st.bar_chart(df, use_container_width=True)


st.subheader("Detect emotions")
uploaded = st.file_uploader("Upload a face image", type=["jpg", "jpeg", "png", "bmp", "gif"])
if uploaded is not None:
	data = uploaded.getvalue()
	st.image(Image.open(io.BytesIO(data)).convert("RGB"), caption="Input", use_column_width=True)
	if st.button("Detect", disabled=not ctx.has_key):
		with st.spinner("Calling API..."):
			try:
				with ctx.make_client() as client:
					faces = client.detect(io.BytesIO(data))
			except ServiceError as e:
				st.error(f"Service error {e.code}: {e.message}")
			except EmotionClientError as e:
				st.error(f"API error: {e}")
			else:
				if not faces:
					st.info("No faces detected.")
				for i, face in enumerate(faces):
					emo = face.emotion
					if emo is None:
						continue
					label, score = emo.top()
					st.success(f"Face {i + 1}: {label} ({score:.2f})")
					render_probability_chart(emo.to_ranked_list())
	if not ctx.has_key:
		st.info("Enter a subscription key to enable detection.")
