"""Test handlers, interceptors and fakes."""
