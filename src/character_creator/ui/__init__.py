"""Gradio user interface for Character Creator."""
