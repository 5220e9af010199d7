import discord

from data.game_data import LOCATIONS, TIER_EMOJIS, get_location_tier
from services.base import BaseService
from utils.errors import GameError
from utils.theme_utils import THEME_COLORS, get_success_embed, get_user_id, send_response


class LocationService(BaseService):
    """Island map and travel between islands."""

    def travel(self, user_id, destination: str) -> dict:
        character = self.require_character(user_id)
        location = LOCATIONS.get(destination)
        if location is None:
            raise GameError(
                "❌ That island doesn't exist! Use `a m` to see the map.",
                'LOCATION_NOT_FOUND',
                {'destination': destination},
            )
        if character.get('location') == destination:
            raise GameError(f"❌ You're already at {location['name']}!", 'ALREADY_THERE')
        if character['level'] < location['level']:
            raise GameError(
                f"❌ You need to be level {location['level']} to sail to {location['name']}!",
                'LEVEL_TOO_LOW',
                {'required': location['level'], 'current': character['level']},
            )

        character['location'] = destination
        self.save(user_id, character)
        self.logger.info("%s traveled to %s", user_id, destination)
        return location

    async def handle_map_view(self, source):
        character = self.require_character(get_user_id(source))
        current = LOCATIONS.get(character.get('location'), {})

        embed = discord.Embed(
            title="🗺️ East Blue",
            description=f"📍 You are at **{current.get('name', 'somewhere at sea')}**\n{current.get('description', '')}",
            color=THEME_COLORS['primary'],
        )

        tiers = {}
        for location_id, location in LOCATIONS.items():
            tiers.setdefault(get_location_tier(location['level']), []).append((location_id, location))

        for tier, emoji in TIER_EMOJIS.items():
            if tier not in tiers:
                continue
            lines = []
            for location_id, location in tiers[tier]:
                marker = "📍" if location_id == character.get('location') else ("✅" if character['level'] >= location['level'] else "🔒")
                lines.append(f"{marker} {location['name']} `{location_id}` (Lv.{location['level']})")
            embed.add_field(name=f"{emoji} {tier.title()}", value="\n".join(lines), inline=False)

        embed.set_footer(text="Sail with `a tr <island>`")
        await send_response(source, embed=embed)

    async def handle_travel(self, source, destination: str):
        location = self.travel(get_user_id(source), destination)
        embed = get_success_embed(f"⛵ Arrived at {location['name']}", location['description'])
        await send_response(source, embed=embed)
