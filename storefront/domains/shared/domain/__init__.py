from storefront.domains.shared.domain.entities import Address, CustomerInfo, Store, WorkContext

__all__ = ["Address", "CustomerInfo", "Store", "WorkContext"]
