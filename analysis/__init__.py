"""Nachträgliche Prüfung fertiger Besprechungspläne."""
