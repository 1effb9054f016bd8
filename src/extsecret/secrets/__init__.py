"""Secret resolution: find, compute and write back missing ExternalSecret properties."""
