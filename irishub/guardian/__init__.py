"""Guardian module: super accounts, their messages, keeper and genesis handling."""