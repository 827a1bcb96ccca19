"""Protocol framing, group parameters and SRP arithmetic"""
