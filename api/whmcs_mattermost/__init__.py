"""WHMCS notification provider for Mattermost."""

__version__ = "1.0.0"
