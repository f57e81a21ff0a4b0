# SPDX-License-Identifier: MIT


class EntryType:
    TASKS = "tasks"
    CUSTOM_LISTS = "customLists"
    THREE_YEAR_GOALS = "threeYearGoals"
    NINETY_DAY_TARGETS = "ninetyDayTargets"
    PLANS = "plans"
    TAGS = "tags"
    NOTEPAD_CONTENT = "notepadContent"


# Deprecated cache keys still read once to migrate data written by older
# clients. Maps new key -> old key.
LEGACY_ENTRY_TYPES: dict[str, str] = {
    EntryType.PLANS: "weeklyGoals",
    EntryType.NOTEPAD_CONTENT: "notepad_content",
}
