"""Exercise catalog: random candidate lookups and YAML seeding."""
