"""
System tag catalog.

Fixed, process-wide, read-only. Region and language tag ids match the keys
of the tables in newsreader.tagging.keywords; topic tag ids match the topic
table keys.
"""

from typing import Optional

from newsreader.models.news_item import Tag, TagCategory


DEFAULT_TAGS: tuple[Tag, ...] = (
    # Regions
    Tag(id="north-america", name="North America", color="#FF6B6B", category=TagCategory.REGION.value),
    Tag(id="south-america", name="South America", color="#4ECDC4", category=TagCategory.REGION.value),
    Tag(id="europe", name="Europe", color="#45B7D1", category=TagCategory.REGION.value),
    Tag(id="asia", name="Asia", color="#96CEB4", category=TagCategory.REGION.value),
    Tag(id="africa", name="Africa", color="#FFEEAD", category=TagCategory.REGION.value),
    Tag(id="oceania", name="Oceania", color="#D4A5A5", category=TagCategory.REGION.value),
    
    # Languages
    Tag(id="english", name="English", color="#9B59B6", category=TagCategory.LANGUAGE.value),
    Tag(id="spanish", name="Spanish", color="#E67E22", category=TagCategory.LANGUAGE.value),
    Tag(id="french", name="French", color="#F1C40F", category=TagCategory.LANGUAGE.value),
    Tag(id="german", name="German", color="#2ECC71", category=TagCategory.LANGUAGE.value),
    
    # Topics
    Tag(id="politics", name="Politics", color="#E74C3C", category=TagCategory.TOPIC.value),
    Tag(id="economy", name="Economy", color="#27AE60", category=TagCategory.TOPIC.value),
    Tag(id="technology", name="Technology", color="#3498DB", category=TagCategory.TOPIC.value),
    Tag(id="science", name="Science", color="#8E44AD", category=TagCategory.TOPIC.value),
    Tag(id="health", name="Health", color="#2C3E50", category=TagCategory.TOPIC.value),
    Tag(id="sports", name="Sports", color="#F39C12", category=TagCategory.TOPIC.value),
    Tag(id="entertainment", name="Entertainment", color="#D35400", category=TagCategory.TOPIC.value),
    Tag(id="environment", name="Environment", color="#16A085", category=TagCategory.TOPIC.value),
)


def get_system_tag(tag_id: str, category: str) -> Optional[Tag]:
    """
    Look up a system tag by id within a category.
    
    Returns:
        The Tag, or None if the catalog has no such entry.
    """
    for tag in DEFAULT_TAGS:
        if tag.id == tag_id and tag.category == category:
            return tag
    return None
