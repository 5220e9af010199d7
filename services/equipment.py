from typing import Optional, Tuple

from data.game_data import EQUIPMENT_SLOTS, ITEMS
from services.base import BaseService
from utils.errors import InventoryError
from utils.theme_utils import get_success_embed, get_user_id, send_response


class EquipmentService(BaseService):
    """Moves items between the inventory and the weapon/armor/accessory slots."""

    def __init__(self, store, **kwargs):
        super().__init__(store, **kwargs)
        self.inventory = None  # wired by the ServiceContainer

    def equip_item(self, user_id, query: str) -> Tuple[str, Optional[str]]:
        """Equip an owned item; returns it and whatever it replaced."""
        character = self.require_character(user_id)
        item_id = self.inventory.find_owned_item(character, query)
        item = ITEMS[item_id]
        slot = EQUIPMENT_SLOTS.get(item['type'])
        if slot is None:
            raise InventoryError.not_equippable(item['name'])

        equipment = character.setdefault('equipment', {})
        previous = equipment.get(slot)
        self.inventory.take_item(character, item_id, 1)
        if previous:
            self.inventory.put_item(character, previous, 1, enforce_limit=False)
        equipment[slot] = item_id

        self.save(user_id, character)
        self.logger.info("%s equipped %s in %s slot", user_id, item_id, slot)
        return item_id, previous

    def unequip_item(self, user_id, slot: str) -> str:
        slot = (slot or "").lower()
        if slot not in EQUIPMENT_SLOTS.values():
            raise InventoryError.invalid_slot(slot)

        character = self.require_character(user_id)
        equipment = character.setdefault('equipment', {})
        item_id = equipment.get(slot)
        if not item_id:
            raise InventoryError.slot_empty(slot)

        self.inventory.put_item(character, item_id, 1, enforce_limit=False)
        equipment[slot] = None
        self.save(user_id, character)
        return item_id

    async def handle_equip(self, source, query: str):
        item_id, previous = self.equip_item(get_user_id(source), query)
        item = ITEMS[item_id]

        stats = ", ".join(f"+{value} {stat.upper()}" for stat, value in item.get('stats', {}).items())
        embed = get_success_embed(f"🛡️ Equipped {item['name']}", stats or None)
        if previous:
            embed.add_field(name="Returned to inventory", value=ITEMS[previous]['name'], inline=False)
        await send_response(source, embed=embed)

    async def handle_unequip(self, source, slot: str):
        item_id = self.unequip_item(get_user_id(source), slot)
        embed = get_success_embed(
            f"Unequipped {ITEMS[item_id]['name']}",
            "The item is back in your inventory.",
        )
        await send_response(source, embed=embed)
