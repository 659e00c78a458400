from mosaic.collection.mosaic_array import MosaicArray, MosaicArrayError, MosaicKeyError

__all__ = ["MosaicArray", "MosaicArrayError", "MosaicKeyError"]
