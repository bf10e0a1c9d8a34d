"""Netflix show request validation rules."""
from functools import lru_cache

from core.validation import (
    AbstractValidator,
    custom,
    not_,
    null_value,
    rule_for,
    string_empty_or_null,
    string_matches,
    string_size_less_than_or_equal,
)
from models.netflix_show import ShowType
from schemas.netflix_show import NetflixShowDTO

PRINTABLE_ASCII = r"^[\x20-\x7E]+$"
COUNTRY_MAX_LENGTH = 60
RATING_MIN, RATING_MAX = 1, 10


def enum_names_pattern(enum_cls) -> str:
    """Anchored alternation of the member names, e.g. ``^(MOVIE|TV_SHOW)$``."""
    return "^(" + "|".join(member.name for member in enum_cls) + ")$"


def enum_names_listing(enum_cls) -> str:
    return " or ".join(member.name for member in enum_cls)


def check_rating_range(rating) -> bool:
    if rating is None or isinstance(rating, bool) or not isinstance(rating, int):
        return False
    return RATING_MIN <= rating <= RATING_MAX


class NetflixShowsValidator(AbstractValidator[NetflixShowDTO]):
    """Field rules for show create/update bodies."""

    def rules(self):
        present = not_(string_empty_or_null())
        printable = string_matches(PRINTABLE_ASCII)

        return [
            rule_for("show_type")
                .must(present)
                    .with_message("ShowType must not be null or empty")
                    .with_field_name("ShowType")
                .must(string_matches(enum_names_pattern(ShowType)))
                    .when(present)
                    .with_message(f"ShowType must be either {enum_names_listing(ShowType)}")
                    .with_field_name("ShowType"),

            rule_for("title")
                .must(present)
                    .with_message("Title must not be null or empty")
                    .with_field_name("Title")
                .must(printable)
                    .when(present)
                    .with_message("Title must contain only printable ASCII characters")
                    .with_field_name("Title"),

            rule_for("director")
                .must(printable)
                    .when(present)
                    .with_message("Director must contain only printable ASCII characters")
                    .with_field_name("Director"),

            rule_for("cast_members")
                .must(printable)
                    .when(present)
                    .with_message("Cast members must contain only printable ASCII characters")
                    .with_field_name("CastMembers"),

            rule_for("country")
                .must(present)
                    .with_message("Country must not be null or empty")
                    .with_field_name("Country")
                .must(printable)
                    .when(present)
                    .with_message("Country must contain only printable ASCII characters")
                    .with_field_name("Country")
                .must(string_size_less_than_or_equal(COUNTRY_MAX_LENGTH))
                    .when(present)
                    .with_message(f"Country must be less than or equal to {COUNTRY_MAX_LENGTH} character length")
                    .with_field_name("Country"),

            rule_for("date_added")
                .must(not_(null_value()))
                    .with_message("DateAdded must not be null or empty")
                    .with_field_name("DateAdded"),

            rule_for("release_year")
                .must(not_(null_value()))
                    .with_message("ReleaseYear must not be null or empty")
                    .with_field_name("ReleaseYear"),

            rule_for("rating")
                .must(custom(check_rating_range, name="rating_range[1,10]"))
                    .when(not_(null_value()))
                    .with_message(f"Rating must be between {RATING_MIN} and {RATING_MAX}")
                    .with_field_name("Rating"),

            rule_for("listed_in")
                .must(printable)
                    .when(present)
                    .with_message("ListedIn must contain only printable ASCII characters")
                    .with_field_name("ListedIn"),

            # description is accepted as-is
        ]


@lru_cache
def get_validator() -> NetflixShowsValidator:
    """Process-wide validator instance, injected as a FastAPI dependency."""
    return NetflixShowsValidator()
