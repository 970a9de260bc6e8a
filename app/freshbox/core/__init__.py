"""Core provisioning logic: config, pipeline, export sync."""
