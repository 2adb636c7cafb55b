"""Process-wide services: telemetry and startup timing."""
