"""Import von Anfrage-Stapeln."""
