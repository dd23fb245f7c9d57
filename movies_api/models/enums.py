from enum import IntEnum


class Gender(IntEnum):
    NOT_SET_OR_NOT_SPECIFIED = 0
    FEMALE = 1
    MALE = 2
    NON_BINARY = 3


class SortBy(IntEnum):
    SORT_BY_UNSPECIFIED = 0
    POPULARITY_ASC = 1
    POPULARITY_DESC = 2
    REVENUE_ASC = 3
    REVENUE_DESC = 4
    PRIMARY_RELEASE_DATE_ASC = 5
    PRIMARY_RELEASE_DATE_DESC = 6
    ORIGINAL_TITLE_ASC = 7
    ORIGINAL_TITLE_DESC = 8
    VOTE_AVERAGE_ASC = 9
    VOTE_AVERAGE_DESC = 10
    VOTE_COUNT_ASC = 11
    VOTE_COUNT_DESC = 12


class WatchMonetizationType(IntEnum):
    WATCH_MONETIZATION_TYPE_UNSPECIFIED = 0
    FLATRATE = 1
    FREE = 2
    ADS = 3
    RENT = 4
    BUY = 5
