"""Industry keys and the search phrases each one expands to."""

from typing import Dict, List

INDUSTRY_QUERIES: Dict[str, List[str]] = {
    "construction": ["construction companies", "general contractors", "building contractors"],
    "logistics": ["logistics companies", "freight forwarding", "supply chain companies"],
    "moving": ["moving companies", "movers", "relocation services"],
    "warehouse": ["warehouse companies", "warehousing services", "storage facilities"],
    "service": ["service companies", "field service companies", "maintenance companies"],
    "trucking": ["trucking companies", "freight carriers", "hauling companies"],
    "field_services": ["field services", "mobile service companies", "on-site service providers"],
}

INDUSTRY_LABELS: Dict[str, str] = {
    "construction": "Construction",
    "logistics": "Logistics",
    "moving": "Moving",
    "warehouse": "Warehouse",
    "service": "Service",
    "trucking": "Trucking",
    "field_services": "Field Services",
}
