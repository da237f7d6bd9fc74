"""Presenter Picker: roster editor plus a timed three-role random draw."""
