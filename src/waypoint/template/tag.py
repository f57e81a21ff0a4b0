# SPDX-License-Identifier: MIT

import random
from typing import Any

TAG_COLORS = [
    "#9b87f5",
    "#7E69AB",
    "#6E59A5",
    "#D6BCFA",
    "#F2FCE2",
    "#FEF7CD",
    "#FEC6A1",
    "#E5DEFF",
    "#FFDEE2",
    "#FDE1D3",
    "#D3E4FD",
    "#F1F0FB",
    "#8B5CF6",
    "#D946EF",
    "#F97316",
    "#0EA5E9",
    "#33C3F0",
    "#0FA0CE",
    "#ea384c",
]


def get_random_tag_color() -> str:
    return random.choice(TAG_COLORS)


def get_tag_template() -> dict[str, Any]:
    return {
        "name": "",
        "color": get_random_tag_color(),
    }
