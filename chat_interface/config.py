"""
Configuration - fixed phrases and message templates

Runtime settings (bot name, group name, delays) come from core.config.
"""

# Exact texts that trigger the group invite
JOIN_KEYWORDS = frozenset({"进群", "入群"})

# Sent to a new contact after their friend request was accepted
FRIEND_WELCOME_TEMPLATE = "你好，我是{who_am_i}，回复“进群”我将邀请你加入\"{group_name}\"。"

# Sent into the room after a member was added
ROOM_WELCOME_TEMPLATE = "欢迎 {name} 加入群聊！"

# Operator-facing log lines
LOG_SCAN = "扫描二维码登录：{code}"
LOG_LOGIN = "用户 {name} 登录"
LOG_LOGOUT = "用户 {name} 登出"
LOG_ERROR = "遇到错误：{error}"
LOG_MESSAGE_TYPE = "消息类型：{kind}"
LOG_MESSAGE_SENDER = "消息发送者备注名：{name}"
LOG_MESSAGE_TEXT = "收到消息：{text}"
LOG_INVITED = "已邀请 {name} 加入群聊 {group_name}"
LOG_ROOM_NOT_FOUND = "未找到指定群聊 {group_name}"
LOG_FRIENDSHIP_RECEIVED = "接收到好友请求：{name}"
LOG_FRIENDSHIP_ACCEPTED = "已接受好友请求：{name}"
LOG_FRIENDSHIP_WELCOMED = "已向好友 {name} 发送欢迎消息"
