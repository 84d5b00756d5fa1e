"""Generation form: state, request orchestration, rendering and the Gradio UI."""
