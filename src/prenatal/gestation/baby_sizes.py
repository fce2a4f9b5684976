"""Week-by-week baby size comparisons."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BabySizeEntry:
    """Size of the baby in a given gestational week, compared to a familiar object."""

    week: int
    object_name: str
    icon: str
    length: str
    weight: str


BABY_SIZES: dict[int, BabySizeEntry] = {
    entry.week: entry
    for entry in [
        BabySizeEntry(4, "Poppy Seed", "🌱", "0.1 cm", "< 1g"),
        BabySizeEntry(5, "Sesame Seed", "🍬", "0.13 cm", "< 1g"),
        BabySizeEntry(6, "Lentil", "🫘", "0.5 cm", "< 1g"),
        BabySizeEntry(7, "Blueberry", "🫐", "1.3 cm", "< 1g"),
        BabySizeEntry(8, "Raspberry", "🧁", "1.6 cm", "1g"),
        BabySizeEntry(9, "Cherry", "🍒", "2.3 cm", "2g"),
        BabySizeEntry(10, "Strawberry", "🍓", "3.1 cm", "4g"),
        BabySizeEntry(11, "Fig", "🥯", "4.1 cm", "7g"),
        BabySizeEntry(12, "Lime", "🍋", "5.4 cm", "14g"),
        BabySizeEntry(13, "Lemon", "🍋", "6.7 cm", "23g"),
        BabySizeEntry(14, "Peach", "🍑", "8.7 cm", "43g"),
        BabySizeEntry(15, "Apple", "🍎", "10.1 cm", "70g"),
        BabySizeEntry(16, "Avocado", "🥑", "11.6 cm", "100g"),
        BabySizeEntry(17, "Pear", "🍐", "13 cm", "140g"),
        BabySizeEntry(18, "Bell Pepper", "🫑", "14.2 cm", "190g"),
        BabySizeEntry(19, "Mango", "🥭", "15.3 cm", "240g"),
        BabySizeEntry(20, "Banana", "🍌", "25.6 cm", "300g"),
        BabySizeEntry(21, "Carrot", "🥕", "26.7 cm", "360g"),
        BabySizeEntry(22, "Papaya", "🥭", "27.8 cm", "430g"),
        BabySizeEntry(23, "Grapefruit", "🍊", "28.9 cm", "500g"),
        BabySizeEntry(24, "Cantaloupe", "🍈", "30 cm", "600g"),
        BabySizeEntry(25, "Cauliflower", "🥦", "34.6 cm", "660g"),
        BabySizeEntry(26, "Lettuce", "🥬", "35.6 cm", "760g"),
        BabySizeEntry(27, "Cabbage", "🥬", "36.6 cm", "875g"),
        BabySizeEntry(28, "Eggplant", "🍆", "37.6 cm", "1 kg"),
        BabySizeEntry(29, "Butternut Squash", "🎃", "38.6 cm", "1.2 kg"),
        BabySizeEntry(30, "Cucumber", "🥒", "39.9 cm", "1.3 kg"),
        BabySizeEntry(31, "Coconut", "🥥", "41.1 cm", "1.5 kg"),
        BabySizeEntry(32, "Jicama", "🥔", "42.4 cm", "1.7 kg"),
        BabySizeEntry(33, "Pineapple", "🍍", "43.7 cm", "1.9 kg"),
        BabySizeEntry(34, "Cantaloupe", "🍈", "45 cm", "2.1 kg"),
        BabySizeEntry(35, "Honeydew Melon", "🍈", "46.2 cm", "2.4 kg"),
        BabySizeEntry(36, "Romaine Lettuce", "🥬", "47.4 cm", "2.6 kg"),
        BabySizeEntry(37, "Swiss Chard", "🥬", "48.6 cm", "2.9 kg"),
        BabySizeEntry(38, "Leek", "🥬", "49.8 cm", "3.1 kg"),
        BabySizeEntry(39, "Mini Watermelon", "🍉", "50.7 cm", "3.3 kg"),
        BabySizeEntry(40, "Small Pumpkin", "🎃", "51.2 cm", "3.5 kg"),
    ]
}

FIRST_SIZE_WEEK = min(BABY_SIZES)
LAST_SIZE_WEEK = max(BABY_SIZES)


def lookup_baby_size(week: int) -> BabySizeEntry:
    """Return the size comparison for a week.

    Weeks before 4 or after 40 fall back to the first or last entry, so
    a lookup always succeeds.
    """
    clamped = max(FIRST_SIZE_WEEK, min(LAST_SIZE_WEEK, week))
    return BABY_SIZES[clamped]
