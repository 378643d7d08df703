"""
views-stratify

뷰 쿼리 결과를 exclusive / remainder 두 디스플레이로 겹침 없이 분할
"""
__version__ = "0.1.0"
