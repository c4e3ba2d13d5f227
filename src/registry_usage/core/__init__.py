"""Artifact Registry client and report configuration."""
