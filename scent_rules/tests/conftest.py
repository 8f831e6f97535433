from __future__ import annotations

import pytest

TOC_PAGE = (
    "Scent Work Regulations\n"
    "Table of Contents\n"
    "CHAPTER 5 Requirements Applying to All Classes\n"
    "CHAPTER 7 Odor Search Division\n"
)

GENERAL_PAGE = (
    "CHAPTER 5 Requirements Applying to All Classes\n"
    "Section 1. Search Area Size\n"
    "Each search area must be at least 100 square feet and no more than 200 square feet.\n"
    "Section 2. Reserved\n"
    "n/a\n"
    "Section 3. Collars, Leashes, and Harnesses\n"
    "Dogs may be handled on a 6 foot leash attached to a flat buckle collar.\n"
)

GENERAL_PAGE_CONTINUED = (
    "CHAPTER 5 13\n"
    'Section 4. "Alert" Calls\n'
    'When the dog finds odor the handler must call "Alert" to the judge. '
    'Master handlers must call "Finish" once all hides are found.\n'
)

CONTAINER_PAGE = (
    "CHAPTER 7 Odor Search Division\n"
    "Section 4. Container Search\n\n"
    "Container Novice Class : The search area contains 15 identical cardboard box containers "
    "arranged in 3 rows of 5. Hides: 1 (Known)  Target odor is Birch. Unlike the Interior "
    "element, the dog works only the containers. The time limit is two minutes with a "
    "30 second warning.\n\n"
    "Container Advanced Class : Containers of various size and type are used. Scoring "
    "follows the Interior Novice Class: rules. CHAPTER 7 31 "
    "Hides: 2 (Known) The search lasts three minutes and the dog must ignore 1 non-food "
    "distraction.\n"
)

INTERIOR_PAGE = (
    "Section 5. Interior Search\n\n"
    "Interior Novice Class : The search area is one room. Hides: 1 (Known) The search must "
    "be completed within three minutes.\n\n"
    "Interior Excellent Class : Too short.\n\n"
    "Interior Master Class : Hides: 1 (Known)   2 (Known)   3 (Known)   1-4 (Unknown)   "
    "The handler will not be told how many hides are placed in each area.\n"
)

TRIAL_PAGE = (
    "CHAPTER 8 Trial Procedures\n"
    "Section 1. Ribbons\n"
    "Ribbons are awarded to each qualifying dog with a score of 100.\n"
)


@pytest.fixture()
def sample_pages() -> list[str]:
    return [
        TOC_PAGE,
        GENERAL_PAGE,
        GENERAL_PAGE_CONTINUED,
        CONTAINER_PAGE,
        INTERIOR_PAGE,
        TRIAL_PAGE,
    ]
