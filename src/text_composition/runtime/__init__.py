"""Runtime services (logging, profiling) shared by the composition model."""
