"""
Routes commands from both entry points to the game services.

`handle_message_command` parses free-text messages such as `a buy potion 3`;
`dispatch_slash` takes the typed options of an `/a buy` interaction. Both
resolve the command through the registry, shape their input into the same
positional arguments and call the same service method.
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from data.game_data import DEFAULT_BET
from utils.command_registry import CommandSpec, resolve
from utils.config import COMMAND_PREFIX
from utils.errors import CharacterError, CommandError, GameError
from utils.theme_utils import get_user_id, send_response

logger = logging.getLogger(__name__)

GENERIC_ERROR = "❌ An error occurred while processing your command. Please try again later."

_MENTION_RE = re.compile(r"^<@!?(\d+)>$")


def parse_user_id(token: Optional[str]) -> Optional[str]:
    """Accept `<@123>`, `<@!123>` or a raw numeric id."""
    if not token:
        return None
    token = token.strip()
    match = _MENTION_RE.match(token)
    if match:
        return match.group(1)
    return token if token.isdigit() else None


def parse_positive_int(token) -> Optional[int]:
    try:
        value = int(str(token).replace(',', ''))
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def normalize_destination(text: str) -> str:
    """`Syrup Village` -> `syrup_village`."""
    return re.sub(r"[^\w]", "", "_".join(text.split()).lower())


def split_quantity(tokens: List[str]) -> Tuple[str, int]:
    """Split `<item words...> [quantity]`; quantity defaults to 1."""
    if len(tokens) > 1 and tokens[-1].lstrip('-').isdigit():
        return " ".join(tokens[:-1]), int(tokens[-1])
    return " ".join(tokens), 1


# Free-text argument shaping. Each parser gets the tokens after the command
# name and returns the positional arguments for the service method.

def _start_args(tokens, spec):
    if not tokens:
        return ()
    if len(tokens) < 2:
        raise CommandError.missing_args(spec.usage)
    return " ".join(tokens[:-1]), tokens[-1]


def _profile_args(tokens, spec):
    if not tokens:
        return ()
    target_id = parse_user_id(tokens[0])
    if target_id is None:
        raise CommandError.invalid_args("Mention a player to view their profile.", spec.usage)
    return (target_id,)


def _target_args(tokens, spec):
    target_id = parse_user_id(tokens[0])
    if target_id is None:
        raise CommandError.invalid_args("Mention a player or give their user id.", spec.usage)
    return (target_id,)


def _give_args(tokens, spec):
    if len(tokens) < 2:
        raise CommandError.missing_args(spec.usage)
    target_id = parse_user_id(tokens[0])
    if target_id is None:
        raise CommandError.invalid_args("Mention the player you want to give coins to.", spec.usage)
    amount = parse_positive_int(tokens[1])
    if amount is None:
        raise CommandError.invalid_args("The amount must be a whole number greater than 0.", spec.usage)
    return target_id, amount


def _query_args(tokens, spec):
    return (" ".join(tokens),)


def _slot_args(tokens, spec):
    return (tokens[0].lower(),)


def _quantity_args(tokens, spec):
    return split_quantity(tokens)


def _leaderboard_args(tokens, spec):
    board_type, page = "level", 1
    rest = list(tokens)
    if rest and not rest[0].isdigit():
        board_type = rest.pop(0).lower()
    if rest:
        page = parse_positive_int(rest[0]) or 1
    return board_type, page


def _shop_args(tokens, spec):
    return (tokens[0].upper() if tokens else None,)


def _gamble_args(tokens, spec):
    if not tokens or tokens[0].lower() == "help":
        return "help", None
    game = tokens[0].lower()
    if game == "slots":
        raw_amount = tokens[1] if len(tokens) > 1 else DEFAULT_BET
    else:
        # `a g 500` is shorthand for slots
        game, raw_amount = "slots", tokens[0]
    amount = parse_positive_int(raw_amount)
    if amount is None:
        raise CommandError.invalid_args("The bet must be a whole number.", spec.usage)
    return game, amount


def _travel_args(tokens, spec):
    return (normalize_destination(" ".join(tokens)),)


def _first_token_args(tokens, spec):
    return (tokens[0],) if tokens else ()


def _help_args(tokens, spec):
    return (tokens[0].lower(),) if tokens else ()


def _quiz_args(tokens, spec):
    return (tokens[0].lower(),) if tokens else ()


MESSAGE_PARSERS: Dict[str, Callable[[List[str], CommandSpec], tuple]] = {
    "start": _start_args,
    "profile": _profile_args,
    "reset": _first_token_args,
    "give": _give_args,
    "duel": _target_args,
    "use": _query_args,
    "equip": _query_args,
    "unequip": _slot_args,
    "buy": _quantity_args,
    "sell": _quantity_args,
    "leaderboard": _leaderboard_args,
    "shop": _shop_args,
    "gamble": _gamble_args,
    "travel": _travel_args,
    "help": _help_args,
    "quiz": _quiz_args,
}


def build_message_args(spec: CommandSpec, tokens: List[str]) -> tuple:
    if spec.requires_args and not tokens:
        raise CommandError.missing_args(spec.usage)
    if not spec.allow_args:
        return ()
    parser = MESSAGE_PARSERS.get(spec.name)
    return tuple(parser(tokens, spec)) if parser else ()


# Slash option shaping

def _member_id(member):
    return str(member.id) if member is not None else None


def _slash_start(spec, name=None, mentor=None, **_):
    if not name or not mentor:
        return ()
    return name, mentor


def _slash_profile(spec, user=None, **_):
    return (_member_id(user),) if user is not None else ()


def _slash_target(spec, user=None, **_):
    if user is None:
        raise CommandError.missing_args(spec.usage)
    return (_member_id(user),)


def _slash_give(spec, user=None, amount=None, **_):
    if user is None or amount is None:
        raise CommandError.missing_args(spec.usage)
    if parse_positive_int(amount) is None:
        raise CommandError.invalid_args("The amount must be a whole number greater than 0.", spec.usage)
    return _member_id(user), int(amount)


def _slash_item(spec, item=None, **_):
    if not item:
        raise CommandError.missing_args(spec.usage)
    return (item,)


def _slash_slot(spec, slot=None, **_):
    if not slot:
        raise CommandError.missing_args(spec.usage)
    return (slot.lower(),)


def _slash_quantity(spec, item=None, quantity=None, **_):
    if not item:
        raise CommandError.missing_args(spec.usage)
    return item, 1 if quantity is None else quantity


def _slash_leaderboard(spec, type=None, page=None, **_):
    return (type or "level").lower(), page or 1


def _slash_shop(spec, type=None, **_):
    return (type.upper() if type else None,)


def _slash_gamble(spec, game=None, amount=None, **_):
    if game is None and amount is None:
        return "help", None
    game = (game or "slots").lower()
    if game == "help":
        return "help", None
    return game, DEFAULT_BET if amount is None else amount


def _slash_travel(spec, destination=None, **_):
    if not destination:
        raise CommandError.missing_args(spec.usage)
    return (normalize_destination(destination),)


def _slash_reset(spec, confirm=None, **_):
    if not confirm:
        raise CommandError.missing_args(spec.usage)
    return (confirm,)


def _slash_help(spec, topic=None, **_):
    return (topic.lower(),) if topic else ()


def _slash_quiz(spec, answer=None, **_):
    return (answer.lower(),) if answer else ()


SLASH_SHAPERS = {
    "start": _slash_start,
    "profile": _slash_profile,
    "reset": _slash_reset,
    "give": _slash_give,
    "duel": _slash_target,
    "use": _slash_item,
    "equip": _slash_item,
    "unequip": _slash_slot,
    "buy": _slash_quantity,
    "sell": _slash_quantity,
    "leaderboard": _slash_leaderboard,
    "shop": _slash_shop,
    "gamble": _slash_gamble,
    "travel": _slash_travel,
    "help": _slash_help,
    "quiz": _slash_quiz,
}


def build_slash_args(spec: CommandSpec, options: dict) -> tuple:
    shaper = SLASH_SHAPERS.get(spec.name)
    return tuple(shaper(spec, **options)) if shaper else ()


async def _run(source, services, spec: CommandSpec, args: tuple):
    user_id = get_user_id(source)
    if spec.requires_character and not services.character.has_character(user_id):
        raise CharacterError.not_found(user_id)

    service = getattr(services, spec.service)
    handler = getattr(service, spec.method)
    logger.info("Executing command %s for user %s", spec.name, user_id)
    await handler(source, *args)


async def _report(source, error: Exception, ephemeral: bool, command: str):
    if isinstance(error, GameError):
        logger.info("Command %s rejected: %s", command, error.code)
        message = error.message
    else:
        logger.exception("Error executing command %s", command, exc_info=error)
        message = GENERIC_ERROR
    await send_response(source, content=message, ephemeral=ephemeral)


async def handle_message_command(message, services, prefix: str = COMMAND_PREFIX) -> bool:
    """Handle a free-text command. Returns False when the message isn't one."""
    if message.author.bot:
        return False

    content = message.content or ""
    if not content.lower().startswith(prefix.lower()):
        return False

    tokens = content[len(prefix):].split()
    if not tokens:
        return False

    name, args = tokens[0], tokens[1:]
    spec = resolve(name)
    try:
        if spec is None:
            raise CommandError.unknown(name, prefix)
        await _run(message, services, spec, build_message_args(spec, args))
    except Exception as e:
        await _report(message, e, False, spec.name if spec else name)
    return True


async def dispatch_slash(interaction, services, subcommand: str, **options):
    """Run a slash subcommand through the registry with its typed options."""
    spec = resolve(subcommand)
    try:
        if spec is None:
            raise CommandError.unknown(subcommand)
        await _run(interaction, services, spec, build_slash_args(spec, options))
    except Exception as e:
        await _report(interaction, e, True, spec.name if spec else subcommand)
