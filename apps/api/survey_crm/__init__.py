"""Home energy survey CRM API."""
