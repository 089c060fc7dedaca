"""Shared helpers: time, ids, HTTP envelopes, concurrency."""
