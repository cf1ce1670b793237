"""Structural classification of WeChat usernames.

Every other module decides "is this a room / a person / an official account"
through these predicates, so they must stay pure and total: an unrecognized
string simply matches none of them.
"""

# Standard group chat: "<digits>@chatroom"
ROOM_SUFFIX = "@chatroom"
# Enterprise (WeCom) group chat: "<digits>@im.chatroom"
IM_ROOM_SUFFIX = "@im.chatroom"
# Enterprise (WeCom) individual: "<id>@openim"
IM_CONTACT_SUFFIX = "@openim"
# Official accounts: "gh_<hex>"
OFFICIAL_PREFIX = "gh_"


def is_room_id(username: str | None) -> bool:
    """Standard room id, e.g. "19850419xxx@chatroom"."""
    return bool(username) and username.endswith(ROOM_SUFFIX)


def is_im_room_id(username: str | None) -> bool:
    """Enterprise room id, e.g. "10696051xxx@im.chatroom"."""
    return bool(username) and username.endswith(IM_ROOM_SUFFIX)


def is_any_room_id(username: str | None) -> bool:
    return is_room_id(username) or is_im_room_id(username)


def is_im_contact_id(username: str | None) -> bool:
    """Enterprise individual id, e.g. "7881300xxx@openim"."""
    return bool(username) and username.endswith(IM_CONTACT_SUFFIX)


def is_contact_id(username: str | None) -> bool:
    """Standard individual (or official account) id such as "wxid_xxx"."""
    if not username or any(c.isspace() for c in username):
        return False
    return not (is_any_room_id(username) or is_im_contact_id(username))


def is_any_contact_id(username: str | None) -> bool:
    return is_contact_id(username) or is_im_contact_id(username)


def is_contact_official_id(username: str | None) -> bool:
    """Official account id, e.g. "gh_3dfda90e39d6"."""
    return bool(username) and username.startswith(OFFICIAL_PREFIX)
