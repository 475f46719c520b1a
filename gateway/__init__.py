"""Lead submission gateway: validates form posts and forwards them to Airtable."""

__version__ = "1.0.0"
