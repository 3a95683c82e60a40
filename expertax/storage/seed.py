"""Default agent roster, inserted once at startup"""

import logging

from .base import Storage

logger = logging.getLogger(__name__)

DEFAULT_AGENTS = [
    {
        "name": "Sandy",
        "title": "Tax Preparation Specialist, CPA",
        "bio": (
            "Experienced tax professional specializing in individual and family tax preparation. "
            "Dedicated to helping clients maximize their refunds and achieve financial peace of mind."
        ),
        "email": "sandy@provisionexpertax.com",
        "image_url": "https://iili.io/f1vE9Qp.jpg",
        "credentials": ["CPA", "Individual Tax Prep", "+1 more"],
    },
    {
        "name": "AI Tax Agent",
        "title": "Automated Tax Assistant",
        "bio": (
            "Our cutting-edge AI technology provides instant calculations, preliminary tax guidance, "
            "and 24/7 support. Perfect for quick questions and simple tax scenarios."
        ),
        "email": "ai@provisionexpertax.com",
        "image_url": "https://i.ibb.co/N7gZd3Z/ai-tax-agent-professional.png",
        "credentials": ["AI Technology", "24/7 Support", "+2 more"],
    },
    {
        "name": "Jennifer Constantino",
        "title": "Senior Tax Consultant",
        "bio": (
            "Dedicated tax professional based in Hollywood, FL, providing comprehensive tax preparation "
            "and consultation services. Committed to delivering personalized financial guidance."
        ),
        "email": "jennconstantino93@gmail.com",
        "image_url": "https://iili.io/f1vNNN1.jpg",
        "credentials": ["Tax Preparation", "Business Consulting", "+1 more"],
    },
]


def seed_agents(storage: Storage) -> int:
    """Insert the default roster if no agents exist. Returns the number inserted."""
    if storage.count_agents() > 0:
        logger.info("Agent roster already seeded")
        return 0

    for agent in DEFAULT_AGENTS:
        storage.create_agent(**agent)
    logger.info(f"✅ Seeded {len(DEFAULT_AGENTS)} agents")
    return len(DEFAULT_AGENTS)
