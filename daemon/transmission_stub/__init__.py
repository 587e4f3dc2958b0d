"""transmission_stub — in-process Transmission daemon for tests and demos."""
