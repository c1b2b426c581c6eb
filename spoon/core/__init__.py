"""Core building blocks: port waiting and the SSH hand-off."""
