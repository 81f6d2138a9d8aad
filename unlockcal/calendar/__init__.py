"""ICS parsing: event models, date tokens and the VEVENT block scanner."""
