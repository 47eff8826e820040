"""
Learning content entities as returned by the API.

The API speaks camelCase and Mongo-style `_id`; these models use snake_case
and convert at the boundary via from_api() / to_payload().
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

COURSE_LEVELS = ('beginner', 'intermediate', 'advanced')
MATERIAL_TYPES = ('pdf', 'audio', 'worksheet', 'other')


def entity_id(data: Dict) -> Optional[str]:
    """Server ids arrive as `_id` or `id`."""
    value = data.get('_id') or data.get('id')
    return str(value) if value else None


def _int(value, default=0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class Category:
    id: Optional[str] = None
    name: str = ''
    slug: str = ''
    description: str = ''
    image_url: str = ''
    is_active: bool = True

    @classmethod
    def from_api(cls, data: Dict) -> 'Category':
        return cls(
            id=entity_id(data),
            name=data.get('name') or '',
            slug=data.get('slug') or '',
            description=data.get('description') or '',
            image_url=data.get('imageUrl') or '',
            is_active=data.get('isActive', True) is not False,
        )

    def to_payload(self) -> Dict:
        return {
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'imageUrl': self.image_url,
            'isActive': self.is_active,
        }


@dataclass
class Course:
    id: Optional[str] = None
    category_id: str = ''
    title: str = ''
    subtitle: str = ''
    description: str = ''
    duration_weeks: int = 4
    level: str = 'beginner'
    cover_image: str = ''
    trailer_url: str = ''
    is_published: bool = False
    views: int = 0
    # Display-only, resolved from the loaded categories
    category_name: str = ''

    @classmethod
    def from_api(cls, data: Dict) -> 'Course':
        category = data.get('categoryId') or data.get('category') or ''
        category_name = ''
        # Search results may embed the populated category document
        if isinstance(category, dict):
            category_name = category.get('name') or ''
            category = entity_id(category) or ''
        level = data.get('level') or 'beginner'
        return cls(
            id=entity_id(data),
            category_id=str(category),
            title=data.get('title') or '',
            subtitle=data.get('subtitle') or '',
            description=data.get('description') or '',
            duration_weeks=_int(data.get('durationWeeks'), 0),
            level=level if level in COURSE_LEVELS else 'beginner',
            cover_image=data.get('coverImage') or '',
            trailer_url=data.get('trailerUrl') or '',
            is_published=bool(data.get('isPublished')),
            views=_int(data.get('views'), 0),
            category_name=category_name,
        )

    @property
    def status_key(self) -> str:
        return 'published' if self.is_published else 'draft'

    def to_payload(self) -> Dict:
        return {
            'categoryId': self.category_id,
            'title': self.title,
            'subtitle': self.subtitle,
            'description': self.description,
            'durationWeeks': self.duration_weeks,
            'level': self.level,
            'coverImage': self.cover_image,
            'trailerUrl': self.trailer_url,
            'isPublished': self.is_published,
        }


@dataclass
class Lesson:
    id: Optional[str] = None
    course_id: str = ''
    title: str = ''
    description: str = ''
    order: int = 0
    video_url: str = ''
    duration_sec: int = 0
    is_free_preview: bool = False
    objectives: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict) -> 'Lesson':
        return cls(
            id=entity_id(data),
            course_id=str(data.get('courseId') or ''),
            title=data.get('title') or '',
            description=data.get('description') or '',
            order=_int(data.get('order'), 0),
            video_url=data.get('videoUrl') or '',
            duration_sec=_int(data.get('durationSec'), 0),
            is_free_preview=bool(data.get('isFreePreview')),
            objectives=list(data.get('objectives') or []),
        )

    def to_payload(self) -> Dict:
        return {
            'courseId': self.course_id,
            'title': self.title,
            'description': self.description,
            'order': self.order,
            'videoUrl': self.video_url,
            'durationSec': self.duration_sec,
            'isFreePreview': self.is_free_preview,
            'objectives': list(self.objectives),
        }


@dataclass
class Material:
    id: Optional[str] = None
    course_id: str = ''
    title: str = ''
    type: str = 'pdf'
    url: str = ''
    mime: str = ''
    size: int = 0

    @classmethod
    def from_api(cls, data: Dict) -> 'Material':
        material_type = data.get('type') or 'other'
        return cls(
            id=entity_id(data),
            course_id=str(data.get('courseId') or ''),
            title=data.get('title') or '',
            type=material_type if material_type in MATERIAL_TYPES else 'other',
            url=data.get('url') or '',
            mime=data.get('mime') or '',
            size=_int(data.get('size'), 0),
        )

    def to_payload(self) -> Dict:
        return {
            'courseId': self.course_id,
            'title': self.title,
            'type': self.type,
            'url': self.url,
            'mime': self.mime,
            'size': self.size,
        }


def sort_lessons(lessons: List[Lesson]) -> List[Lesson]:
    """Ascending by order; sorted() is stable so ties keep server order."""
    return sorted(lessons, key=lambda lesson: lesson.order or 0)
