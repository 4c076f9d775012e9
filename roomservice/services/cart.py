"""
購物車 (Cart)
房客端的純記憶體累加器，單一房客使用、不需鎖
"""
from collections import OrderedDict
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple, Union

from ..schemas.catalog import ItemType, MenuItem, ServiceItem
from ..schemas.order import CartLine
from .errors import ValidationFailed


def line_total(line: CartLine) -> Decimal:
    return Decimal(str(line.price)) * line.quantity


def compute_total(lines: Iterable[CartLine]) -> float:
    """Σ 單價 × 數量，以 Decimal 計算後取到小數第二位"""
    total = sum((line_total(line) for line in lines), Decimal("0"))
    return float(total.quantize(Decimal("0.01")))


class Cart:
    """以 (item_type, item_id) 為鍵的購物車，保留加入順序供顯示"""

    def __init__(self) -> None:
        self._lines: "OrderedDict[Tuple[str, str], CartLine]" = OrderedDict()

    def add(self, item_type: ItemType, item: Union[MenuItem, ServiceItem]) -> CartLine:
        """
        加入一個目錄項目

        已存在則數量 +1；否則新增數量 1 的明細，單價在此時快照。
        停售中的項目不能加入。
        """
        if item.item_type != item_type:
            raise ValidationFailed(f"Item {item.id} is a {item.item_type} item, not {item_type}")
        if not item.is_available:
            raise ValidationFailed(f"{item.name} is not available right now")

        key = (item_type, item.id)
        line = self._lines.get(key)
        if line is not None:
            line.quantity += 1
            return line

        line = CartLine(
            item_type=item_type,
            item_id=item.id,
            name=item.name,
            price=item.price,
            quantity=1,
        )
        self._lines[key] = line
        return line

    def remove(self, item_type: ItemType, item_id: str) -> None:
        """數量 -1；數量為 1 時直接移除該明細"""
        key = (item_type, item_id)
        line = self._lines.get(key)
        if line is None:
            return

        if line.quantity > 1:
            line.quantity -= 1
        else:
            del self._lines[key]

    def set_notes(self, item_type: ItemType, item_id: str, notes: Optional[str]) -> None:
        line = self._lines.get((item_type, item_id))
        if line is not None:
            line.notes = notes

    def get(self, item_type: ItemType, item_id: str) -> Optional[CartLine]:
        return self._lines.get((item_type, item_id))

    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def total(self) -> float:
        return compute_total(self._lines.values())

    def clear(self) -> None:
        self._lines.clear()

    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)
