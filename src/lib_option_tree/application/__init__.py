"""Application layer: pure functions writing option trees into stores."""
