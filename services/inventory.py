"""Inventory storage, consumable use and selling."""

from typing import Dict, List, Tuple

import discord

from data.game_data import ITEM_TYPE_EMOJIS, ITEMS, find_item, sell_price
from services.base import BaseService
from utils.config import BUFF_DURATION_SECONDS
from utils.errors import InventoryError, ShopError
from utils.theme_utils import THEME_COLORS, get_success_embed, get_user_id, send_response


class InventoryService(BaseService):

    def add_item(self, user_id, item_id: str, quantity: int = 1, enforce_limit: bool = True) -> int:
        """Add items and return the new stack size."""
        character = self.require_character(user_id)
        self.put_item(character, item_id, quantity, enforce_limit)
        self.save(user_id, character)
        return character['inventory'][item_id]

    def put_item(self, character: Dict, item_id: str, quantity: int, enforce_limit: bool = True):
        inventory = character.setdefault('inventory', {})
        current = inventory.get(item_id, 0)
        limit = ITEMS[item_id].get('stack_limit', 99)
        if enforce_limit and current + quantity > limit:
            raise InventoryError.stack_limit(ITEMS[item_id]['name'], current, limit)
        inventory[item_id] = current + quantity

    def take_item(self, character: Dict, item_id: str, quantity: int):
        inventory = character.setdefault('inventory', {})
        current = inventory.get(item_id, 0)
        if current < quantity:
            raise InventoryError.item_not_found(ITEMS.get(item_id, {}).get('name', item_id))
        if current == quantity:
            del inventory[item_id]
        else:
            inventory[item_id] = current - quantity

    def find_owned_item(self, character: Dict, query: str) -> str:
        owned = [item_id for item_id, qty in character.get('inventory', {}).items() if qty > 0 and item_id in ITEMS]
        item_id = find_item(query, owned)
        if item_id is None:
            raise InventoryError.item_not_found(query)
        return item_id

    def prune_buffs(self, character: Dict, now: float = None) -> List[Dict]:
        now = self.clock() if now is None else now
        character['active_buffs'] = [b for b in character.get('active_buffs', []) if b['expires_at'] > now]
        return character['active_buffs']

    def use_item(self, user_id, query: str) -> Tuple[str, Dict]:
        """Consume one item; returns its id and what it did."""
        character = self.require_character(user_id)
        item_id = self.find_owned_item(character, query)
        item = ITEMS[item_id]
        if item['type'] != 'CONSUMABLE':
            raise InventoryError.not_usable(item['name'])

        now = self.clock()
        buffs = self.prune_buffs(character, now)
        applied = {}
        for effect, value in item.get('effect', {}).items():
            if effect == 'heal':
                old_hp = character['hp']
                character['hp'] = min(character['max_hp'], old_hp + value)
                applied['heal'] = character['hp'] - old_hp
            else:
                buffs.append({'stat': effect, 'value': value, 'expires_at': now + BUFF_DURATION_SECONDS})
                applied[effect] = value

        self.take_item(character, item_id, 1)
        self.save(user_id, character)
        self.logger.info("%s used %s", user_id, item_id)
        return item_id, applied

    def sell_item(self, user_id, query: str, quantity: int = 1) -> Tuple[str, int]:
        """Sell owned items at half price; returns the item id and coins earned."""
        if quantity is None or quantity <= 0:
            raise ShopError.invalid_quantity(quantity)

        character = self.require_character(user_id)
        item_id = self.find_owned_item(character, query)
        owned = character['inventory'][item_id]
        if owned < quantity:
            raise InventoryError.not_enough(ITEMS[item_id]['name'], owned, quantity)

        earned = sell_price(item_id) * quantity
        self.take_item(character, item_id, quantity)
        character['coins'] = character.get('coins', 0) + earned
        self.record_transaction(character, earned, 'SELL', f"Sold {quantity}x {ITEMS[item_id]['name']}")
        self.save(user_id, character)
        return item_id, earned

    # Command handlers

    async def handle_inventory_view(self, source):
        user_id = get_user_id(source)
        character = self.require_character(user_id)
        self.prune_buffs(character)

        embed = discord.Embed(title=f"🎒 {character['name']}'s inventory", color=THEME_COLORS['primary'])

        grouped: Dict[str, List[str]] = {}
        for item_id, qty in sorted(character.get('inventory', {}).items()):
            item = ITEMS.get(item_id)
            if item is None or qty <= 0:
                continue
            grouped.setdefault(item['type'], []).append(f"{item['name']} x{qty}")

        if not grouped:
            embed.description = "Your inventory is empty. Visit the shop with `a s`!"
        for item_type in ITEM_TYPE_EMOJIS:
            if item_type in grouped:
                embed.add_field(
                    name=f"{ITEM_TYPE_EMOJIS[item_type]} {item_type.title()}",
                    value="\n".join(grouped[item_type]),
                    inline=False,
                )

        equipped = [
            f"{slot.title()}: {ITEMS[item_id]['name'] if item_id in ITEMS else 'None'}"
            for slot, item_id in character.get('equipment', {}).items()
        ]
        if equipped:
            embed.add_field(name="🛡️ Equipped", value="\n".join(equipped), inline=False)

        buffs = character.get('active_buffs', [])
        if buffs:
            now = self.clock()
            lines = [f"+{b['value']} {b['stat'].upper()} ({int((b['expires_at'] - now) // 60)}m left)" for b in buffs]
            embed.add_field(name="✨ Active buffs", value="\n".join(lines), inline=False)

        embed.set_footer(text=f"💰 {character.get('coins', 0):,} coins")
        await send_response(source, embed=embed)

    async def handle_use_item(self, source, query: str):
        user_id = get_user_id(source)
        item_id, applied = self.use_item(user_id, query)
        character = self.require_character(user_id)

        lines = []
        if 'heal' in applied:
            lines.append(f"❤️ Restored {applied['heal']} HP ({character['hp']}/{character['max_hp']})")
        for stat, value in applied.items():
            if stat != 'heal':
                lines.append(f"✨ +{value} {stat.upper()} for one hour")

        embed = get_success_embed(f"Used {ITEMS[item_id]['name']}", "\n".join(lines) or None)
        await send_response(source, embed=embed)

    async def handle_sell_item(self, source, query: str, quantity: int = 1):
        user_id = get_user_id(source)
        item_id, earned = self.sell_item(user_id, query, quantity)
        character = self.require_character(user_id)

        embed = get_success_embed(
            "💰 Sold!",
            f"You sold {quantity}x {ITEMS[item_id]['name']} for **{earned:,}** coins.",
        )
        embed.set_footer(text=f"Balance: {character['coins']:,} coins")
        await send_response(source, embed=embed)
