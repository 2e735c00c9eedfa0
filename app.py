import os
import streamlit.web.bootstrap as bootstrap


def main():
	# Runs the credential and detection page in ui/ with `python app.py`
	ui_path = os.path.join(os.path.dirname(__file__), "ui", "app_streamlit.py")
	bootstrap.run(ui_path, False, [], {})


if __name__ == "__main__":
	main()
