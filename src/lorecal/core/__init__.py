"""Calendar value types, definitions and error taxonomy."""
