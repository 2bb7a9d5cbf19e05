"""
Mapping between backend attribute codes and storefront URL keys.

Backends expose attributes such as ``cs_manufacturer`` or ``cs_memory``; the
storefront puts short, SEO-friendly keys in its URLs (``manufacturer``,
``storage``). Explicit mappings win; everything else is derived by stripping
known prefixes, replacing underscores with hyphens and lowercasing.
"""

from typing import Dict, Tuple

ATTRIBUTE_URL_KEYS: Dict[str, str] = {
    "cs_manufacturer": "manufacturer",
    "cs_memory": "storage",
    "cs_color": "color",
}

URL_KEY_ATTRIBUTES: Dict[str, str] = {url_key: code for code, url_key in ATTRIBUTE_URL_KEYS.items()}

REMOVED_PREFIXES: Tuple[str, ...] = ("cs_",)


def attribute_code_to_url_key(attribute_code: str) -> str:
    """
    Examples:
        cs_manufacturer -> manufacturer   (explicit)
        cs_screen_size  -> screen-size    (derived)
    """
    if not attribute_code:
        return ""
    mapped = ATTRIBUTE_URL_KEYS.get(attribute_code)
    if mapped:
        return mapped

    url_key = attribute_code
    for prefix in REMOVED_PREFIXES:
        if url_key.startswith(prefix):
            url_key = url_key[len(prefix):]
    return url_key.replace("_", "-").lower()


def url_key_to_attribute_code(url_key: str) -> str:
    """
    Reverse of attribute_code_to_url_key for explicit mappings.

    Derived keys cannot be reversed exactly (the stripped prefix is lost), so
    unmapped keys only get hyphens turned back into underscores.
    """
    if not url_key:
        return ""
    mapped = URL_KEY_ATTRIBUTES.get(url_key)
    if mapped:
        return mapped
    return url_key.replace("-", "_")
