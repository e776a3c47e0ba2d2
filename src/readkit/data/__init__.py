"""Sample files bundled with readkit and read by logical name (read1, read2)."""
