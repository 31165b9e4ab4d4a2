"""Pipeline stages: decoder, profiles, schema inference, row normalizers."""
