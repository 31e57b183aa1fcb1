"""Infrastructure adapters: key/value substrates and storage backends."""
