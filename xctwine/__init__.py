"""XCTwine - typed Swift string extensions from Xcode string catalogues."""

__version__ = "1.0.0"
