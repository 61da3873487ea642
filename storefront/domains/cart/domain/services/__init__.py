from storefront.domains.cart.domain.services.adjustments import collect_discounts, find_tax_rate, matches_code

__all__ = ["collect_discounts", "find_tax_rate", "matches_code"]
