from mosaic.error import MosaicError


def test_mosaic_error():
    err = None

    try:
        raise MosaicError(None)
    except MosaicError as basicerr:
        assert str(basicerr) == "MosaicError"

    try:
        raise MosaicError(None, origin="here")
    except MosaicError as err0:
        err = err0
        assert str(err) == "here: MosaicError"

    try:
        raise MosaicError("one", origin="here")
    except MosaicError as err1:
        err += err1

    try:
        raise MosaicError(["two"])
    except MosaicError as err2:
        err += err2
    assert str(err) == "here: two"

    assert err.messages == ["one", "two"]

    err += "three"
    err += ["four", "five"]
    assert err.messages == ["one", "two", "three", "four", "five"]
