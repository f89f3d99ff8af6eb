name = 'netmatrix'
