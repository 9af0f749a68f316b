"""Shared configuration, storage and security primitives."""
