"""Array manipulation helpers built around the MosaicArray container."""
