class PortfolioAdminError(Exception):
    """Base exception for all portfolio_admin errors"""
    pass

class ConfigError(PortfolioAdminError):
    """Missing or inconsistent global.json / collection config"""
    pass

class RecordStoreError(PortfolioAdminError):
    """
    A collection document could not be read or written, or its records
    don't match what the admin table expects (missing string 'id', etc)
    """
    pass

class UnknownCollectionError(PortfolioAdminError, KeyError):
    """No collection definition registered under the requested id"""
    pass
