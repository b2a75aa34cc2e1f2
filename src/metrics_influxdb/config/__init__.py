"""Configuration for the InfluxDB reporter and its transport."""
