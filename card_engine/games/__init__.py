"""
基于引擎实现的游戏: 21点和GridRunner
"""
