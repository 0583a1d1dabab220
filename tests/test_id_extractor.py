"""
Tests for dataset id extraction.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.id_extractor import extract_dataset_ids, extract_ids_from_html, unique_ids

ID_1 = '4b7b45cb-e8b2-4864-a80d-6d9110865b99'
ID_2 = '3a3ea3cc-dbf3-4d69-99db-a5c2f0165ae6'


class TestExtractDatasetIds:
    """Tests for free-text extraction."""

    def test_extracts_from_free_text(self):
        text = f"see {ID_1} and also ({ID_2}), plus {ID_1} again"
        assert extract_dataset_ids(text) == [ID_1, ID_2]

    def test_case_insensitive_and_normalised(self):
        assert extract_dataset_ids(ID_1.upper()) == [ID_1]

    def test_ignores_malformed_tokens(self):
        text = "4b7b45cb-e8b2-4864-a80d 12345678-1234-1234-1234-12345 zzzzzzzz-zzzz-zzzz-zzzz-zzzzzzzzzzzz"
        assert extract_dataset_ids(text) == []

    def test_empty(self):
        assert extract_dataset_ids('') == []


class TestExtractIdsFromHtml:
    """Tests for saved listing pages."""

    def test_dataset_links(self):
        html = f"""
        <div class="cards">
          <a href="/ar/datasets/view/{ID_1}/resources">One</a>
          <a href="/en/datasets/view/{ID_2}">Two</a>
          <a href="/ar/datasets/view/{ID_2}">Two again</a>
          <a href="/ar/datasets">Listing</a>
        </div>
        """
        assert extract_ids_from_html(html) == [ID_1, ID_2]

    def test_ids_outside_links_ignored(self):
        assert extract_ids_from_html(f"<p>{ID_1}</p>") == []


def test_unique_ids_keeps_order():
    assert unique_ids(['b', 'A', 'a', ' b ']) == ['b', 'a']


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
