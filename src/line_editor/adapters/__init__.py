"""Host front ends driving the command layer."""
