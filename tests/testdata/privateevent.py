"""Private websocket channels, declared as typed constants."""

from typing import NewType

Side = NewType("Side", int)

SideBuy: Side = Side(1)
SideSell: Side = Side(-1)

PrivateChannel = NewType("PrivateChannel", str)

PrivateChannelOrder: PrivateChannel = PrivateChannel("order")
PrivateChannelOrderUpdate: PrivateChannel = PrivateChannel("order_update")
PrivateChannelTrade: PrivateChannel = PrivateChannel("trade")
PrivateChannelTradeUpdate: PrivateChannel = PrivateChannel("trade_update")
PrivateChannelTradeFastUpdate: PrivateChannel = PrivateChannel("trade_fast_update")
PrivateChannelAccount: PrivateChannel = PrivateChannel("account")
PrivateChannelAccountUpdate: PrivateChannel = PrivateChannel("account_update")
PrivateChannelSubAccount: PrivateChannel = PrivateChannel("sub_account")
PrivateChannelSubAccountUpdate: PrivateChannel = PrivateChannel("sub_account_update")

# @group Margin
PrivateChannelMWalletOrder: PrivateChannel = PrivateChannel("mwallet_order")
PrivateChannelMWalletTrade: PrivateChannel = PrivateChannel("mwallet_trade")
PrivateChannelMWalletTradeFastUpdate: PrivateChannel = PrivateChannel("mwallet_trade_fast_update")
PrivateChannelMWalletAccount: PrivateChannel = PrivateChannel("mwallet_account")
PrivateChannelMWalletAveragePrice: PrivateChannel = PrivateChannel("mwallet_average_price")
PrivateChannelBorrowing: PrivateChannel = PrivateChannel("borrowing")
PrivateChannelAdRatio: PrivateChannel = PrivateChannel("ad_ratio")
PrivateChannelPoolQuota: PrivateChannel = PrivateChannel("borrowing_pool_quota")


def channel_topic(channel: PrivateChannel) -> str:
    return f"private.{channel}"


# @group Misc
PrivateChannelAveragePrice: PrivateChannel = PrivateChannel("average_price")
PrivateChannelFavoriteMarket: PrivateChannel = PrivateChannel("favorite_market")
