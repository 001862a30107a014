from __future__ import annotations

import os


# Central routing for LLM use-cases. Edit here to change per-operation defaults.
# You can also override per-route model via env vars for quick testing.
#
# Keys are use_case identifiers consumed by services/llm_client.py
ROUTES: dict[str, dict] = {
    # Talking points for a scraped profile vs. the reference profile
    "profile_comparison": {
        "provider": os.getenv("LLM_COMPARISON_PROVIDER", "openai"),
        "model": os.getenv("OPENAI_MODEL_COMPARISON"),  # falls back to global OPENAI_MODEL
        "temperature": 0.4,
        # Logical operation name for logging (not a vendor API name)
        "operation": "profile_comparison",
    },
}
