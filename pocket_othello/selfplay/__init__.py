"""Bot-vs-bot self-play"""
