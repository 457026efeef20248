"""HTTP adapter exposing the fusion engine."""
