"""Instruction handlers, one module per instruction family."""
