"""The item shop: listing and buying."""

from typing import Tuple

import discord

from data.game_data import ITEM_TYPE_EMOJIS, ITEMS, SHOP_ITEMS, find_item
from services.base import BaseService
from utils.errors import CommandError, EconomyError, InventoryError, ShopError
from utils.theme_utils import THEME_COLORS, get_success_embed, get_user_id, send_response


class ShopService(BaseService):

    def __init__(self, store, **kwargs):
        super().__init__(store, **kwargs)
        self.inventory = None  # wired by the ServiceContainer

    def buy(self, user_id, query: str, quantity: int = 1) -> Tuple[str, int]:
        """Buy from the shop; returns the item id and total cost."""
        item_id = find_item(query, SHOP_ITEMS)
        if item_id is None:
            raise ShopError.item_not_found(query)
        if quantity is None or quantity <= 0:
            raise ShopError.invalid_quantity(quantity)

        character = self.require_character(user_id)
        item = ITEMS[item_id]
        owned = character.get('inventory', {}).get(item_id, 0)
        limit = item.get('stack_limit', 99)
        if owned + quantity > limit:
            raise InventoryError.stack_limit(item['name'], owned, limit)

        total = item['price'] * quantity
        if character.get('coins', 0) < total:
            raise EconomyError.insufficient_funds(total, character.get('coins', 0))

        character['coins'] -= total
        self.inventory.put_item(character, item_id, quantity)
        self.record_transaction(character, -total, 'PURCHASE', f"Bought {quantity}x {item['name']}")
        self.save(user_id, character)
        self.logger.info("%s bought %dx %s for %d", user_id, quantity, item_id, total)
        return item_id, total

    async def handle_shop(self, source, item_type: str = None):
        user_id = get_user_id(source)
        character = self.require_character(user_id)

        if item_type and item_type not in ITEM_TYPE_EMOJIS:
            valid = ", ".join(t.lower() for t in ITEM_TYPE_EMOJIS)
            raise CommandError.invalid_args(f"Unknown item type! Choose from: {valid}.")

        embed = discord.Embed(
            title="🏪 A4A Shop",
            description="Buy with `a buy <item> [quantity]` or `/a buy`.",
            color=THEME_COLORS['gold'],
        )
        for type_name, emoji in ITEM_TYPE_EMOJIS.items():
            if item_type and type_name != item_type:
                continue
            lines = [
                f"{ITEMS[item_id]['name']} `{item_id}` · 💰 {ITEMS[item_id]['price']:,}\n"
                f"└ {ITEMS[item_id]['description']}"
                for item_id in SHOP_ITEMS if ITEMS[item_id]['type'] == type_name
            ]
            if lines:
                embed.add_field(name=f"{emoji} {type_name.title()}", value="\n".join(lines), inline=False)

        embed.set_footer(text=f"Your balance: {character.get('coins', 0):,} coins")
        await send_response(source, embed=embed)

    async def handle_buy(self, source, query: str, quantity: int = 1):
        user_id = get_user_id(source)
        item_id, total = self.buy(user_id, query, quantity)
        character = self.require_character(user_id)

        embed = get_success_embed(
            "🛍️ Purchase complete!",
            f"You bought {quantity}x {ITEMS[item_id]['name']} for **{total:,}** coins.",
        )
        embed.set_footer(text=f"Balance: {character['coins']:,} coins")
        await send_response(source, embed=embed)
