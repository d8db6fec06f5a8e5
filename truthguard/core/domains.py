# truthguard/core/domains.py
import tldextract

# Bundled public suffix snapshot only, no fetch at runtime
_extract = tldextract.TLDExtract(suffix_list_urls=())


def registered_domain(url: str) -> str:
    """Returns the registrable domain of a URL or bare host ("www.ndtv.com" -> "ndtv.com"), or "" if it has none."""
    extracted = _extract(url)
    if not extracted.domain or not extracted.suffix:
        return ""
    return f"{extracted.domain}.{extracted.suffix}".lower()
