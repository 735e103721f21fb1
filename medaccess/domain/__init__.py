"""Domain layer: records, validation rules, API schemas."""
