"""Runtime services (telemetry) shared by the buffer and shell layers."""
