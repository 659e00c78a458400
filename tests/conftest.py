# type: ignore
import logging
import os


def init_testsuite_env():
    """Initialize testsuite environment."""
    # Ignore user configuration files, must be done before importing mosaic
    os.environ["MOSAIC_CONFIG"] = "/dev/null"
    os.environ["TZ"] = "UTC"

    import mosaic.log

    # Activate full debug logs
    mosaic.log.activate(level=logging.DEBUG, mosaic_debug=True)


init_testsuite_env()
