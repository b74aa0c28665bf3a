"""Sleep log parsing, timeline reconstruction and charts."""
