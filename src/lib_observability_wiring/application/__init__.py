"""Application layer: ports, emitters, settings binding."""
