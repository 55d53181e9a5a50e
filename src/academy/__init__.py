"""Apex Academy: markdown curriculum site for Salesforce development."""

__version__ = "0.1.0"
