from storefront.core.shared.logger import configure_logging, get_logger, get_service_logger

__all__ = ["configure_logging", "get_logger", "get_service_logger"]
