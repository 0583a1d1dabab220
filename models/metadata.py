"""
Dataset metadata as returned by the catalog lookup endpoint.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


@dataclass
class DatasetMetadata:
    """Decoded metadata for a single catalog dataset."""

    id: str
    title_ar: Optional[str] = None
    title_en: Optional[str] = None
    provider_name_ar: Optional[str] = None
    provider_name_en: Optional[str] = None
    update_frequency: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    resources_count: int = 0
    categories: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], dataset_id: str = None) -> 'DatasetMetadata':
        """
        Build metadata from the catalog's JSON payload.

        Args:
            data: Decoded response body
            dataset_id: Identifier that was requested, used when the payload omits it

        Returns:
            DatasetMetadata instance
        """
        categories = []
        for category in data.get('categories') or []:
            if isinstance(category, dict):
                name = category.get('titleAr') or category.get('titleEn')
                if name:
                    categories.append(name)
            elif category:
                categories.append(str(category))

        return cls(
            id=data.get('id') or dataset_id or '',
            title_ar=data.get('titleAr'),
            title_en=data.get('titleEn'),
            provider_name_ar=data.get('providerNameAr'),
            provider_name_en=data.get('providerNameEn'),
            update_frequency=data.get('updateFrequency'),
            created_at=data.get('createdAt'),
            updated_at=data.get('updatedAt'),
            resources_count=data.get('resourcesCount') or 0,
            categories=categories,
            raw=data,
        )

    @property
    def title(self) -> str:
        return self.title_ar or self.title_en or self.id

    @property
    def provider_name(self) -> Optional[str]:
        return self.provider_name_ar or self.provider_name_en
