"""Infrastructure: settings, logging and MongoDB access."""
