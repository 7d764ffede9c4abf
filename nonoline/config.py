"""
nonoline 的集中配置。

所有可调参数都在这里，各函数以关键字参数的默认值读取，
调用方可以随时显式覆盖。
"""

# 谜题默认尺寸（交互输入时读取的行数/列数）
DEFAULT_PUZZLE_SIZE = 15

# 各格子状态的规范显示符号
SYMBOLS = {
    'painted': 'O',       # 涂黑
    'crossed': 'X',       # 打叉（必为空白）
    'undetermined': '?',  # 未确定
}

# 交互输入时表示退出的词
QUIT_WORDS = ('q', 'quit', 'exit')

# 求解器参数
SOLVER_CONFIG = {
    'max_placements': 200_000,   # 单行枚举的摆放数上限，None 表示不限制
    'cp_time_limit': 10.0,       # CP-SAT 搜索时间上限（秒）
    'cp_max_solutions': 100_000,  # CP-SAT 收集解的上限
}
