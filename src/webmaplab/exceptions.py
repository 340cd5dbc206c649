class WebMapLabError(Exception):
    """Base exception for webmaplab"""
    pass

class RetrievalError(WebMapLabError):
    """Raised when a layer source cannot be retrieved"""
    pass

class ParseError(WebMapLabError):
    """Raised when a layer source is not a valid feature collection"""
    pass

class ConfigurationError(WebMapLabError):
    """Raised when layer names collide or configuration is malformed"""
    pass
