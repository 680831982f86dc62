from enum import Enum


class DfType(str, Enum):
    LOGIA = "Logia"
    ZOAN = "Zoan"
    PARAMECIA = "Paramecia"
    UNDETERMINED = "Undetermined"

    @property
    def path(self) -> str:
        if self is DfType.UNDETERMINED:
            return ""
        return f"/wiki/{self.value}"

    @property
    def list_anchor_id(self) -> str:
        return _DF_TYPE_LIST_ANCHORS[self]

    @classmethod
    def taxonomy(cls) -> list["DfType"]:
        return [t for t in cls if t.path]


_DF_TYPE_LIST_ANCHORS = {
    DfType.LOGIA: "Logia-Types",
    DfType.ZOAN: "List_of_Zoan-Type_Fruits",
    DfType.PARAMECIA: "Paramecia-Type_Fruits",
    DfType.UNDETERMINED: "",
}


class DfSubType(str, Enum):
    ANCIENT_ZOAN = "AncientZoan"
    MYTHICAL_ZOAN = "MythicalZoan"

    @property
    def path(self) -> str:
        return DfType.ZOAN.path

    @property
    def list_anchor_id(self) -> str:
        return "Ancient_Zoan" if self is DfSubType.ANCIENT_ZOAN else "Mythical_Zoan"


class EntityFamily(str, Enum):
    DEVIL_FRUIT = "df"
    PIRATE = "pirate"
    SHIP = "ship"
