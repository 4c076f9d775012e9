"""
RoomService Console
物件營運後台：建築物、房間、QR Code 點餐
"""

__version__ = "1.0.0"
