"""Versioned prompt templates for insight generation."""
