"""Thamara scoring service: deterministic scoring engines and their API."""
