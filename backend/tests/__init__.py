"""Test suite for the chat admin backend."""
