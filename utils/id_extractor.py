"""
Dataset identifier extraction from pasted text and saved catalog pages.
"""

import re
from typing import Iterable, List

from bs4 import BeautifulSoup

DATASET_ID_PATTERN = re.compile(
    r'[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}',
    re.IGNORECASE
)

DATASET_LINK_PATTERN = re.compile(r'/datasets/view/([a-f0-9-]+)', re.IGNORECASE)


def unique_ids(ids: Iterable[str]) -> List[str]:
    """Lower-case and deduplicate ids, keeping first-seen order."""
    seen = set()
    result = []
    for dataset_id in ids:
        normalized = dataset_id.strip().lower()
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def extract_dataset_ids(text: str) -> List[str]:
    """Every identifier-shaped token in ``text``, deduplicated."""
    if not text:
        return []
    return unique_ids(DATASET_ID_PATTERN.findall(text))


def extract_ids_from_html(html: str) -> List[str]:
    """
    Collect dataset ids from the links of a saved catalog listing page.

    Args:
        html: Page source

    Returns:
        Deduplicated ids taken from ``/datasets/view/<id>`` hrefs
    """
    if not html:
        return []

    soup = BeautifulSoup(html, 'html.parser')
    ids = []
    for link in soup.select('a[href*="/datasets/view/"]'):
        match = DATASET_LINK_PATTERN.search(link.get('href', ''))
        if match and DATASET_ID_PATTERN.fullmatch(match.group(1)):
            ids.append(match.group(1))
    return unique_ids(ids)


BROWSER_EXTRACTION_SCRIPT = r"""
(function() {
  const links = document.querySelectorAll('a[href*="/datasets/view/"]');
  const ids = new Set();

  links.forEach(link => {
    const match = link.href.match(/\/datasets\/view\/([a-f0-9-]+)/i);
    if (match) ids.add(match[1]);
  });

  const result = Array.from(ids);
  console.log('Dataset IDs found:', result.length);

  const text = result.join('\n');
  navigator.clipboard.writeText(text)
    .then(() => console.log('IDs copied to clipboard'))
    .catch(() => console.log(text));

  return result;
})();
"""
