"""Readers for package manifests and lockfiles."""
