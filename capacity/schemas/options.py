"""
枚举选项定义
前端下拉框使用的 id/name 列表
"""
from enum import Enum
from typing import Dict, List, Type

from pydantic import BaseModel, Field

from capacity.models.app import DistributionChannelType, Platform
from capacity.models.novel import NovelGenre, NovelStatus, NovelType, RelationType


class OptionItem(BaseModel):
    id: str = Field(description="取值")
    name: str = Field(description="显示名称")


GENRE_LABELS: Dict[NovelGenre, str] = {
    NovelGenre.FANTASY: "Fantasy",
    NovelGenre.ROMANCE: "Romance",
    NovelGenre.ACTION: "Action",
    NovelGenre.THRILLER: "Thriller",
    NovelGenre.MYSTERY: "Mystery",
    NovelGenre.SF: "SF",
    NovelGenre.HORROR: "Horror",
    NovelGenre.DRAMA: "Drama",
    NovelGenre.COMEDY: "Comedy",
    NovelGenre.SLICE_OF_LIFE: "Slice of Life",
    NovelGenre.HISTORICAL: "Historical",
    NovelGenre.MARTIAL_ARTS: "Martial Arts",
    NovelGenre.GAME: "Game",
    NovelGenre.SPORTS: "Sports",
    NovelGenre.MUSIC: "Music",
    NovelGenre.PSYCHOLOGICAL: "Psychological",
    NovelGenre.SUPERNATURAL: "Supernatural",
    NovelGenre.ADVENTURE: "Adventure",
}

NOVEL_TYPE_LABELS: Dict[NovelType, str] = {
    NovelType.SHORT: "Short story",
    NovelType.LONG: "Novel",
    NovelType.SERIES: "Serial",
}

NOVEL_STATUS_LABELS: Dict[NovelStatus, str] = {
    NovelStatus.DRAFT: "Draft",
    NovelStatus.ONGOING: "Ongoing",
    NovelStatus.COMPLETED: "Completed",
    NovelStatus.HIATUS: "Hiatus",
}

RELATION_TYPE_LABELS: Dict[RelationType, str] = {
    RelationType.RELATED: "Related",
    RelationType.SEQUEL: "Sequel",
    RelationType.PREQUEL: "Prequel",
    RelationType.SPINOFF: "Spin-off",
    RelationType.SAME_UNIVERSE: "Same universe",
}

PLATFORM_LABELS: Dict[Platform, str] = {
    Platform.IOS: "iOS",
    Platform.ANDROID: "Android",
    Platform.WEB: "Web",
    Platform.WINDOWS: "Windows",
    Platform.MACOS: "macOS",
    Platform.LINUX: "Linux",
    Platform.GAME: "Game",
}

CHANNEL_LABELS: Dict[DistributionChannelType, str] = {
    DistributionChannelType.APP_STORE: "App Store",
    DistributionChannelType.PLAY_STORE: "Google Play",
    DistributionChannelType.WEB: "Web App",
    DistributionChannelType.STEAM: "Steam",
    DistributionChannelType.STOVE: "Stove",
    DistributionChannelType.EPIC: "Epic Games",
    DistributionChannelType.GOG: "GOG",
    DistributionChannelType.ITCH: "itch.io",
    DistributionChannelType.LANDING_PAGE: "Landing Page",
    DistributionChannelType.DIRECT_DOWNLOAD: "Direct Download",
    DistributionChannelType.GITHUB: "GitHub Releases",
    DistributionChannelType.OTHER: "Other",
}


def option_list(enum_cls: Type[Enum], labels: Dict) -> List[OptionItem]:
    """按枚举声明顺序生成选项列表"""
    return [OptionItem(id=member.value, name=labels.get(member, member.value)) for member in enum_cls]
