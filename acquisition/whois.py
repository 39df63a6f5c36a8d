import requests

import config
from logger import logger


def reverse_whois(domain, email_filters=None):
    """
    Find domains registered with the same WHOIS email as the target.
    Uses the related-domain data on the AlienVault OTX WHOIS indicator.

    Args:
        domain: Target domain
        email_filters: Optional substrings; only registrant emails containing
                       one of them are followed (e.g. ['example'])

    Returns:
        Sorted list of related domain names or empty list on failure
    """
    api_key = config.API_KEYS.get('OTX_API_KEY')
    if not api_key:
        logger.warning("AlienVault OTX API key not configured, skipping reverse whois")
        return []

    url = f"https://otx.alienvault.com/api/v1/indicators/domain/{domain}/whois"

    headers = {
        'X-OTX-API-KEY': api_key,
        'Accept': 'application/json'
    }

    filters = [f.lower().strip() for f in (email_filters or []) if f.strip()]

    try:
        response = requests.get(url, headers=headers, timeout=config.REQUEST_TIMEOUT)

        if response.status_code == 200:
            data = response.json()

            related_domains = set()

            for record in data.get('related', []):
                if record.get('related_type') != 'email':
                    continue

                email = record.get('related', '').lower()
                related_name = record.get('domain', '')

                if not related_name or '@' not in email:
                    continue
                if filters and not any(word in email for word in filters):
                    continue
                if related_name.lower() != domain.lower():
                    related_domains.add(related_name)

            logger.debug("Reverse whois found %d domains for %s", len(related_domains), domain)
            return sorted(related_domains)

        elif response.status_code == 401:
            logger.warning("AlienVault OTX API key invalid or unauthorized")
            return []

        elif response.status_code == 404:
            logger.debug("No AlienVault OTX WHOIS data found for %s", domain)
            return []

        elif response.status_code == 429:
            logger.warning("AlienVault OTX rate limit reached")
            return []

        else:
            logger.warning("AlienVault OTX API error: HTTP %d", response.status_code)
            return []

    except requests.exceptions.Timeout:
        logger.warning("AlienVault OTX request timeout")
        return []

    except requests.exceptions.RequestException as e:
        logger.warning("AlienVault OTX request error: %s", e)
        return []

    except ValueError as e:
        logger.error("AlienVault OTX returned invalid JSON: %s", e)
        return []
