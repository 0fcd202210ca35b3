"""
Millbrook - 四人团队高尔夫赌注赛结算引擎

core: 纯计算核心（加倍状态机、结算分配、杂项、大赛）
application: 比赛编排层（命令/查询服务、配置）
"""

__version__ = "1.0.0"
