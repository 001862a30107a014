from __future__ import annotations

from models import Experience, Profile


# The profile every visitor is compared against. Built once at import time
# and injected into the Comparator.
REFERENCE_PROFILE = Profile(
    name="Lindy",
    headline="Go-to-market and solution engineering for AI agents (AI/SaaS)",
    location="San Francisco",
    skills=[
        "AI agent architecture",
        "Prompt engineering",
        "Multi-agent workflows",
        "LLM evaluation and testing",
        "Voice AI",
        "API integrations",
        "Enterprise sales",
        "MEDDICC",
        "SANDLER",
        "BANT",
        "Challenger Sale",
        "Solution engineering",
        "ICP development",
        "Pricing and packaging",
        "Sales playbook creation",
        "0 to 1 vertical building",
    ],
    experiences=[
        Experience(company="Lindy", title="Go-to-market"),
        Experience(company="Teamflow", title="Sales"),
        Experience(company="Cintas", title="Sales"),
    ],
    summary=(
        "Industry: AI/SaaS. "
        "Interests: Sauna, Hiking, Pilates, Running, Podcasts."
    ),
)
